"""Fixed-width account identity and its SS58 text form."""

from __future__ import annotations

from dataclasses import dataclass

from scalecodec.utils.ss58 import ss58_decode, ss58_encode

IDENTITY_LENGTH = 32
DEFAULT_SS58_FORMAT = 42


@dataclass(frozen=True, slots=True, order=True)
class Identity:
    """32-byte public account identifier.

    Equality and ordering are byte-wise. The textual form is an SS58 address
    whose network prefix is chosen at render time.
    """

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)):
            raise TypeError("Identity expects raw bytes")
        if len(self.raw) != IDENTITY_LENGTH:
            raise ValueError(f"Identity must be {IDENTITY_LENGTH} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_ss58(cls, address: str) -> "Identity":
        """Decode a checksummed SS58 address. Raises ValueError when invalid."""
        if not isinstance(address, str) or not address:
            raise ValueError("SS58 address must be a non-empty string")
        public_key = ss58_decode(address)
        return cls(bytes.fromhex(public_key))

    @classmethod
    def from_hex(cls, value: str) -> "Identity":
        text = value[2:] if value.startswith(("0x", "0X")) else value
        return cls(bytes.fromhex(text))

    @classmethod
    def parse(cls, value: str) -> "Identity":
        """Accept either an SS58 address or a 0x-prefixed hex public key."""
        if value.startswith(("0x", "0X")):
            return cls.from_hex(value)
        return cls.from_ss58(value)

    def to_ss58(self, ss58_format: int = DEFAULT_SS58_FORMAT) -> str:
        return ss58_encode(self.raw, ss58_format=ss58_format)

    def hex(self) -> str:
        return "0x" + self.raw.hex()

    def __str__(self) -> str:
        return self.to_ss58()

    def __repr__(self) -> str:
        return f"Identity({self.hex()})"
