"""gRPC server exposing the unpaginated pickup point listing."""

import logging
from concurrent import futures
from dataclasses import dataclass

import grpc
from google.protobuf import timestamp_pb2

from pvz_store.domain.pvz import PickupPoint
from pvz_store.errors import StorageError
from pvz_store.rpc.protos import (
    PVZ,
    GetPVZListRequest,
    GetPVZListResponse,
    PVZServiceServicer,
    add_PVZServiceServicer_to_server,
)
from pvz_store.services.pvz import PvzService

logger = logging.getLogger(__name__)


@dataclass
class PvzGrpcService(PVZServiceServicer):
    """Servicer for ``pvz.v1.PVZService``."""

    pvz_service: PvzService

    def GetPVZList(  # noqa: N802
        self, request: GetPVZListRequest, context: grpc.ServicerContext
    ) -> GetPVZListResponse:
        """Return every pickup point."""
        try:
            points = self.pvz_service.list_pickup_points()
        except StorageError:
            logger.exception("Failed to list pickup points over gRPC")
            context.abort(grpc.StatusCode.INTERNAL, "internal error")
        return GetPVZListResponse(pvzs=[_to_message(point) for point in points])


def create_grpc_server(
    pvz_service: PvzService, address: str, max_workers: int = 10
) -> tuple[grpc.Server, int]:
    """Create an unstarted server bound to ``address``; return it and the port."""
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))
    add_PVZServiceServicer_to_server(PvzGrpcService(pvz_service), server)
    port = server.add_insecure_port(address)
    return server, port


def _to_message(point: PickupPoint) -> PVZ:
    registration_date = timestamp_pb2.Timestamp()
    registration_date.FromDatetime(point.registration_date)
    return PVZ(
        id=str(point.id),
        city=str(point.city),
        registration_date=registration_date,
    )
