"""Response envelope returned by the REST client in extended mode."""

from dataclasses import dataclass, field


@dataclass
class ApiResponse:
    """Decoded body plus the status and headers it came with."""

    status: int
    body: dict | list | None
    headers: dict = field(default_factory=dict)
    etag: str | None = None
    link: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
