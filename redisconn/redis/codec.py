"""Codec selection for key and value encoding."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from redisconn.errors import UnsupportedCodecError


class CodecName(str, Enum):
    """Supported codec names."""

    BYTE_ARRAY_CODEC = "BYTE_ARRAY_CODEC"
    STRING_CODEC = "STRING_CODEC"
    UTF8_STRING_CODEC = "UTF8_STRING_CODEC"


@dataclass(frozen=True)
class Codec:
    """Encoding strategy applied by redis-py to keys and values.

    Attributes:
        name: Codec name.
        decode_responses: Whether replies are decoded to ``str``.
        encoding: Character set used for encoding and decoding.
        encoding_errors: Error handler for undecodable bytes.
    """

    name: CodecName
    decode_responses: bool
    encoding: str = "utf-8"
    encoding_errors: str = "strict"

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``redis.Redis`` and ``RedisCluster``.

        Returns:
            Encoding keyword arguments.
        """
        return {
            "decode_responses": self.decode_responses,
            "encoding": self.encoding,
            "encoding_errors": self.encoding_errors,
        }


_CODECS: dict[CodecName, Codec] = {
    CodecName.BYTE_ARRAY_CODEC: Codec(CodecName.BYTE_ARRAY_CODEC, decode_responses=False),
    # Raw strings keep undecodable bytes as surrogates so they survive a round trip.
    CodecName.STRING_CODEC: Codec(
        CodecName.STRING_CODEC,
        decode_responses=True,
        encoding_errors="surrogateescape",
    ),
    CodecName.UTF8_STRING_CODEC: Codec(CodecName.UTF8_STRING_CODEC, decode_responses=True),
}


def resolve_codec(name: str | CodecName) -> Codec:
    """Resolve a codec name to its encoding strategy.

    Names are matched exactly; no case folding or trimming is applied.

    Args:
        name: One of ``BYTE_ARRAY_CODEC``, ``STRING_CODEC``, ``UTF8_STRING_CODEC``.

    Returns:
        The matching codec.

    Raises:
        UnsupportedCodecError: If the name is not supported.
    """
    try:
        return _CODECS[CodecName(name)]
    except ValueError as e:
        raise UnsupportedCodecError(name) from e
