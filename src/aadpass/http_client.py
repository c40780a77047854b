from __future__ import annotations

import ssl
from dataclasses import dataclass
from types import TracebackType
from typing import Union

import httpx

CertTypes = Union[str, tuple[str, str]]


@dataclass(frozen=True)
class TransportOptions:
    """TLS and timeout settings handed to every :class:`HttpClient`.

    ``verify`` is either a flag or the path of a CA bundle. ``cert`` is a client
    certificate path or a ``(cert, key)`` pair.
    """

    verify: bool | str = True
    cert: CertTypes | None = None
    timeout: float = 60.0

    def ssl_verify(self) -> bool | ssl.SSLContext:
        """Return the value httpx expects for its ``verify`` argument."""

        if self.verify is False:
            return False
        if self.verify is True and self.cert is None:
            return True
        cafile = self.verify if isinstance(self.verify, str) else None
        context = ssl.create_default_context(cafile=cafile)
        if isinstance(self.cert, tuple):
            context.load_cert_chain(*self.cert)
        elif self.cert is not None:
            context.load_cert_chain(self.cert)
        return context


class HttpClient:
    """Thin httpx wrapper scoped to a single exchange with the identity endpoint.

    Status codes are returned to the caller untouched; transport failures raised
    by httpx propagate unchanged.
    """

    def __init__(self, options: TransportOptions | None = None) -> None:
        self.options = options or TransportOptions()
        self._client = httpx.Client(
            verify=self.options.ssl_verify(),
            timeout=self.options.timeout,
        )

    def request(
        self,
        method: str,
        url: str,
        *,
        content: bytes | str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        # httpx.Client.get() refuses a body, request() accepts one for any method.
        return self._client.request(method, url, content=content, headers=headers or {})

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""

        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
