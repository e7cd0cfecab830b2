"""Level-1 convenience functions.

Each function builds an ``EncodedView`` over the whole sequence, so callers
that only need a yes/no answer, a count or a one-shot conversion do not have
to manage views themselves. Unlike the view methods, ``count_codepoints`` and
``transcode`` validate first and raise on malformed input.
"""

from typing import Optional, Sequence

from .character.sinks import Sink
from .character.view import EncodedView, EncodingLike
from .shared.config import TranscoderConfig
from .shared.errors import InvalidEncodingError
from .shared.logging import get_logger


def validate(
    units: Sequence[int],
    encoding: EncodingLike,
    config: Optional[TranscoderConfig] = None,
) -> bool:
    """Return True iff ``units`` is well-formed in ``encoding``.

    Example:
        >>> validate(b"\\xe2\\x82\\xac", "utf-8")
        True
    """
    return _view(units, encoding, config).validate()


def count_codepoints(
    units: Sequence[int],
    encoding: EncodingLike,
    config: Optional[TranscoderConfig] = None,
) -> int:
    """Count the scalar values in ``units``.

    Raises:
        InvalidEncodingError: if ``units`` is not well-formed
    """
    return _checked_view(units, encoding, config).codepoint_count()


def transcode(
    units: Sequence[int],
    source: EncodingLike,
    target: EncodingLike,
    sink: Sink,
    config: Optional[TranscoderConfig] = None,
) -> int:
    """Validate ``units`` as ``source`` and append their ``target`` form to ``sink``.

    Nothing is written to ``sink`` when validation fails.

    Args:
        units: Source code units
        source: Encoding of ``units``
        target: Encoding to produce
        sink: Receives the target code units
        config: Optional configuration, defaults to ``TranscoderConfig()``

    Returns:
        Number of units appended to ``sink``

    Raises:
        InvalidEncodingError: if ``units`` is not well-formed in ``source``
    """
    return _checked_view(units, source, config).transcode_to(target, sink)


def _view(
    units: Sequence[int],
    encoding: EncodingLike,
    config: Optional[TranscoderConfig],
) -> EncodedView:
    return EncodedView(units, encoding, config=config or TranscoderConfig())


def _checked_view(
    units: Sequence[int],
    encoding: EncodingLike,
    config: Optional[TranscoderConfig],
) -> EncodedView:
    view = _view(units, encoding, config)
    result = view.validate_detailed()
    if not result.is_valid:
        logger = get_logger(__name__, view.config.correlation_id, "api")
        logger.warning(
            "Rejected malformed input",
            extra={"encoding": view.encoding.value, "issue": result.issue.value},
        )
        raise InvalidEncodingError(
            f"Input is not valid {view.encoding.value}: {result.describe()}",
            result,
        )
    return view
