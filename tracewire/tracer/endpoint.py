"""Endpoint value type describing a service participating in a trace."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from tracewire.errors import ValidationError


@dataclass(frozen=True)
class Endpoint:
    """
    Service, host and port of a peer participating in a span.

    ``ipv4`` is stored as an unsigned 32-bit integer; the signed form used by
    Zipkin/Thrift frames is accepted and normalized.
    """

    service_name: str
    ipv4: int = 0
    port: int = 0

    def __post_init__(self) -> None:
        if not -(1 << 31) <= self.ipv4 < (1 << 32):
            raise ValidationError("ipv4 out of 32-bit range", {"ipv4": self.ipv4})
        if not 0 <= self.port < (1 << 16):
            raise ValidationError("port out of 16-bit unsigned range", {"port": self.port})
        if self.ipv4 < 0:
            object.__setattr__(self, "ipv4", self.ipv4 & 0xFFFFFFFF)

    @classmethod
    def from_address(cls, service_name: str, host: str = "0.0.0.0", port: int = 0) -> "Endpoint":
        """Build an endpoint from a dotted-quad IPv4 address."""
        try:
            ipv4 = int(ipaddress.IPv4Address(host))
        except ValueError as exc:
            raise ValidationError("invalid IPv4 address", {"host": host}) from exc
        return cls(service_name=service_name, ipv4=ipv4, port=port)

    @property
    def ipv4_address(self) -> str:
        return str(ipaddress.IPv4Address(self.ipv4))

    def __str__(self) -> str:
        return f"{self.service_name}@{self.ipv4_address}:{self.port}"
