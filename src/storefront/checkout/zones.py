"""Resolve the locally selected zone name to a directory entry."""

import asyncio
import logging

from ..domain.errors import HttpError, ZoneFetchError, ZoneNotFound
from ..domain.models import Zone
from ..domain.ports import ZoneDirectory

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Look up a zone by exact, case-sensitive name.

    The directory is fetched again on every call since zones can change
    between sessions. There is no retry.
    """

    def __init__(self, directory: ZoneDirectory):
        self._directory = directory

    async def resolve(self, name: str) -> Zone:
        """Return the zone called ``name``.

        Raises:
            ZoneFetchError: If the directory could not be fetched or parsed.
            ZoneNotFound: If no zone has that name.
        """
        try:
            zones = await asyncio.to_thread(self._directory.list_zones)
        except HttpError as exc:
            raise ZoneFetchError(f"Failed to fetch zones: {exc}") from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise ZoneFetchError(f"Malformed zones response: {exc!r}") from exc
        except Exception as exc:
            logger.exception("Unexpected error while fetching zones")
            raise ZoneFetchError(f"Failed to fetch zones: {exc!r}") from exc

        for zone in zones:
            if zone.name == name:
                logger.debug("Zone %r resolved to id %r", name, zone.id)
                return zone
        raise ZoneNotFound(name)
