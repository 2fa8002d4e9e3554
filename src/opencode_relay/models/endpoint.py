"""
Endpoint identity of one running `opencode serve` instance.
"""

import re

from pydantic import BaseModel, ConfigDict

_UNSAFE = re.compile(r"[.:]")


class Endpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: int

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self.netloc}"

    @property
    def key(self) -> str:
        """Storage key: `127.0.0.1:4096` -> `127_0_0_1_4096`."""
        return _UNSAFE.sub("_", f"{self.host}_{self.port}")

    @classmethod
    def from_key(cls, key: str) -> "Endpoint":
        """Inverse of `key` for hostnames and IPv4 addresses.

        Colons are not recoverable, so keys with empty host labels (what a
        compressed IPv6 address such as `::1` turns into) are rejected.
        """
        host, sep, port = key.rpartition("_")
        if not sep or not port.isdigit() or "" in host.split("_"):
            raise ValueError(f"Not an endpoint key: {key!r}")
        return cls(host=host.replace("_", "."), port=int(port))

    def __str__(self) -> str:
        return self.netloc
