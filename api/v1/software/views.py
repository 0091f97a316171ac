"""
Software API views.

Clients read the published version to decide whether to update and
whether the application is currently enabled.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.software.serializers import SoftwareVersionResponseSerializer
from core.domain.exceptions import DomainException
from core.instrumentation import Status, StatusCode, get_tracer
from software.application.handlers.get_software_version_handler import GetSoftwareVersionHandler
from software.infrastructure.repositories.django_software_version_repository import (
    DjangoSoftwareVersionRepository,
)

_software_version_repo = DjangoSoftwareVersionRepository()

tracer = get_tracer(__name__)


class SoftwareVersionView(APIView):
    """View for the published software version."""

    @extend_schema(
        operation_id="get_software_version",
        summary="Get Software Version",
        description="Return the current client version and whether the application is enabled. Public.",
        tags=["Software"],
        responses={
            200: SoftwareVersionResponseSerializer,
            404: {"description": "No version published yet"},
        },
    )
    def get(self, request: Request) -> Response:
        """Get the software version."""
        return async_to_sync(self._handle_get_version)(request)

    async def _handle_get_version(self, request: Request) -> Response:
        """Async handler for get software version."""
        with tracer.start_as_current_span("get_software_version") as span:
            handler = GetSoftwareVersionHandler(software_version_repository=_software_version_repo)
            try:
                result = await handler.handle()
            except DomainException as e:
                span.set_attribute("error.code", e.code)
                span.set_status(Status(StatusCode.ERROR, e.message))
                raise

            span.set_attribute("software.version", result.version)
            span.set_status(Status(StatusCode.OK))
            return Response(SoftwareVersionResponseSerializer(result).data)
