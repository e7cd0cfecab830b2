#!/usr/bin/env python3
"""
Quick Start Guide for the Unicode Transcoder.

Walks through the three API levels: one-shot functions, encoded views over a
caller-owned buffer, and the raw per-encoding codecs.
"""

import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicode_transcoder import (
    BoundedSink,
    EncodedView,
    Encoding,
    InvalidEncodingError,
    TranscoderConfig,
    count_codepoints,
    transcode,
    unit_array,
    validate,
)


def level_one_example():
    """Validate, count and convert in single calls."""
    print("\nStep 1: Simple functions")
    print("-" * 30)

    data = "Grüße 😀".encode("utf-8")
    print(f"valid UTF-8: {validate(data, 'utf-8')}")
    print(f"codepoints:  {count_codepoints(data, 'utf-8')}")

    utf16 = unit_array(Encoding.UTF16)
    written = transcode(data, "utf-8", "utf-16", utf16)
    print(f"UTF-16 units ({written}): {[hex(u) for u in utf16]}")

    try:
        transcode(b"\xc0\x80", "utf-8", "utf-32", [])
    except InvalidEncodingError as e:
        print(f"rejected overlong NUL: {e}")


def level_two_example():
    """Size a bounded output buffer before transcoding a window."""
    print("\nStep 2: Encoded views")
    print("-" * 30)

    buffer = bytearray("prefix|€ and 😀|suffix".encode("utf-8"))
    start = buffer.index(b"|") + 1
    stop = buffer.rindex(b"|")
    view = EncodedView(buffer, Encoding.UTF8, first=start, last=stop)

    result = view.validate_detailed()
    print(f"window valid: {result.describe()}")

    needed = view.code_unit_count_in(Encoding.UTF32)
    sink = BoundedSink(needed)
    view.transcode_to(Encoding.UTF32, sink)
    print(f"UTF-32 bytes needed: {view.byte_length_in(Encoding.UTF32)}")
    print(f"scalars: {[hex(u) for u in sink]}")


def level_three_example():
    """Use a codec directly and compare UTF-8 rule sets."""
    print("\nStep 3: Codecs")
    print("-" * 30)

    codec = Encoding.UTF8.codec
    units = []
    codec.encode(0x20AC, units)
    print(f"U+20AC in UTF-8: {[hex(u) for u in units]}")

    sample = b"\xe0\xa0\x80"  # U+0800, minimal form
    strict = EncodedView(sample, Encoding.UTF8).validate()
    legacy = EncodedView(sample, Encoding.UTF8, config=TranscoderConfig.legacy()).validate()
    print(f"E0 A0 80 valid: strict={strict} legacy={legacy}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")
    level_one_example()
    level_two_example()
    level_three_example()
