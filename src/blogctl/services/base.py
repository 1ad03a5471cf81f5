"""BaseService: foundation for services that wrap the blog engine.

Every service receives a :class:`BlogContentHandler` at construction
time and converts engine exceptions into failed :class:`ServiceResult`
objects via :meth:`BaseService._guard`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from blogctl.domain.errors import ConfigurationError, NotFoundError
from blogctl.services.result import CONFIG_ERROR, IO_ERROR, NOT_FOUND, ServiceResult

if TYPE_CHECKING:
    from blogctl.services.handler import BlogContentHandler

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SiteService(BaseService):
            def list_paths(self) -> ServiceResult:
                return self._guard("paths", lambda: ServiceResult(...))
    """

    def __init__(self, handler: BlogContentHandler) -> None:
        self._handler = handler

    @staticmethod
    def _guard(op: str, run: Callable[[], ServiceResult]) -> ServiceResult:
        """Run *run*, mapping engine errors to a failed result for *op*."""
        try:
            return run()
        except NotFoundError as exc:
            return ServiceResult.failure(op, NOT_FOUND, str(exc), path=exc.path)
        except ConfigurationError as exc:
            return ServiceResult.failure(op, CONFIG_ERROR, str(exc))
        except OSError as exc:
            logger.debug("%s failed", op, exc_info=True)
            filename = exc.filename if exc.filename is not None else ""
            return ServiceResult.failure(op, IO_ERROR, str(exc), filename=str(filename))
