"""Protobuf messages and gRPC stubs compiled from `grpc_app/protos/todo.proto`.

The .proto file is the single contract: grpcio-tools compiles it on first
import (the Python counterpart of proto-loader), so there is no separate
protoc build step and no checked-in generated code to drift from it.
The path is resolved against `sys.path`, which holds the project root when
running from a checkout and site-packages when installed.
"""
import grpc


PROTO_PATH = "grpc_app/protos/todo.proto"

todo_pb2, todo_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

# Fully-qualified service name, e.g. for health checks
SERVICE_NAME = todo_pb2.DESCRIPTOR.services_by_name["Todo"].full_name

__all__ = ["PROTO_PATH", "SERVICE_NAME", "todo_pb2", "todo_pb2_grpc"]
