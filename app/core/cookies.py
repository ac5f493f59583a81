import logging
from datetime import datetime, timedelta, timezone
from http.cookies import CookieError
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, unquote

from starlette.requests import Request
from starlette.responses import Response

from app.core.config import Settings, settings as app_settings
from app.core.constants import ATTRIBUTION_COOKIES
from app.core.exceptions import CookieWriteError
from app.schemas.attribution import AttributionRecord

logger = logging.getLogger(__name__)


class CookieStore:
    """Sole accessor for the six attribution cookies of one request.

    Reads come from the inbound request; writes are staged on a scratch
    response and copied onto the outgoing response in one step, so a
    failed call never leaves half of its cookies behind.  Once
    :meth:`commit` has been called the store refuses further writes.
    """

    def __init__(
        self,
        request: Request,
        response: Response,
        settings: Optional[Settings] = None,
    ) -> None:
        self._cookies: Mapping[str, str] = request.cookies
        self._response = response
        self._settings = settings or app_settings
        self._committed = False

    # ------------------------------------------------------------------
    # Cookie attributes
    # ------------------------------------------------------------------

    @property
    def domain(self) -> Optional[str]:
        """Parent domain in production, host-only cookies otherwise."""
        if self._settings.is_production:
            return self._settings.COOKIE_DOMAIN or None
        return None

    @property
    def secure(self) -> bool:
        return self._settings.is_production

    @property
    def committed(self) -> bool:
        return self._committed

    def commit(self) -> None:
        """Mark the outgoing response as sent; later writes are rejected."""
        self._committed = True

    # ------------------------------------------------------------------
    # Read / write / clear
    # ------------------------------------------------------------------

    def read(self) -> AttributionRecord:
        """Return the current attribution values, empty ones as ``None``."""
        return AttributionRecord.from_cookies(
            {
                name: unquote(self._cookies[name])
                for name in ATTRIBUTION_COOKIES
                if name in self._cookies
            }
        )

    def write(self, fields: Dict[str, str], max_age: int) -> None:
        """Set only the cookies in *fields*, all sharing one expiry instant.

        Values are percent-encoded so that client-side scripts read them
        back unquoted and non-latin-1 campaign names survive the header.
        """
        if not fields:
            return
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=max_age)

        def _stage(staging: Response) -> None:
            for name, value in fields.items():
                staging.set_cookie(
                    name,
                    quote(value, safe=""),
                    max_age=max_age,
                    expires=expires_at,
                    path="/",
                    domain=self.domain,
                    secure=self.secure,
                    httponly=False,
                    samesite="lax",
                )

        self._apply(_stage, action="write")
        logger.debug("Wrote attribution cookies %s", sorted(fields))

    def clear_all(self) -> List[str]:
        """Delete all six attribution cookies regardless of their values."""

        def _stage(staging: Response) -> None:
            for name in ATTRIBUTION_COOKIES:
                staging.delete_cookie(name, path="/", domain=self.domain)

        self._apply(_stage, action="clear")
        return list(ATTRIBUTION_COOKIES)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, stage, action: str) -> None:
        if self.committed:
            raise CookieWriteError(
                f"Cannot {action} attribution cookies: response already sent"
            )
        staging = Response()
        try:
            stage(staging)
        except (CookieError, TypeError, ValueError) as exc:
            raise CookieWriteError(
                f"Cannot {action} attribution cookies: {exc}"
            ) from exc
        self._response.raw_headers.extend(_set_cookie_headers(staging))


def _set_cookie_headers(response: Response) -> List[Tuple[bytes, bytes]]:
    return [(key, value) for key, value in response.raw_headers if key == b"set-cookie"]
