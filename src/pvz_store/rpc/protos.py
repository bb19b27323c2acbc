"""``pvz.v1`` message and service classes compiled from ``pvz.proto``.

The schema ships inside this package and is compiled on first import by
``grpcio-tools``.
"""

import grpc

PROTO_PATH = "pvz_store/rpc/pvz.proto"

pvz_pb2, pvz_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

PVZ = pvz_pb2.PVZ
GetPVZListRequest = pvz_pb2.GetPVZListRequest
GetPVZListResponse = pvz_pb2.GetPVZListResponse

PVZServiceServicer = pvz_pb2_grpc.PVZServiceServicer
PVZServiceStub = pvz_pb2_grpc.PVZServiceStub
add_PVZServiceServicer_to_server = pvz_pb2_grpc.add_PVZServiceServicer_to_server
