"""Protobuf messages of the vector data service.

The message classes are built from a ``FileDescriptorProto`` registered in the
default descriptor pool at import time, the same way generated ``_pb2``
modules register themselves, so no protoc step is needed. Field numbers match
the service's ``db_data`` schema (API version 2024-07); only field numbers and
types matter on the wire, so the package name is private to this SDK.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import struct_pb2  # noqa: F401  registers struct.proto

PACKAGE = "pinecone_sdk.db_data.v1"
SERVICE_NAME = "VectorService"

_Field = descriptor_pb2.FieldDescriptorProto
_STRING = _Field.TYPE_STRING
_BOOL = _Field.TYPE_BOOL
_FLOAT = _Field.TYPE_FLOAT
_UINT32 = _Field.TYPE_UINT32
_MESSAGE = _Field.TYPE_MESSAGE

_STRUCT = ".google.protobuf.Struct"


def _ref(name: str) -> str:
    return f".{PACKAGE}.{name}"


def _field(
    name: str,
    number: int,
    field_type: int,
    *,
    repeated: bool = False,
    type_name: str | None = None,
) -> descriptor_pb2.FieldDescriptorProto:
    field = _Field(
        name=name,
        number=number,
        type=field_type,
        label=_Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
    )
    if type_name is not None:
        field.type_name = type_name
    return field


def _message(
    name: str,
    *fields: descriptor_pb2.FieldDescriptorProto,
    nested: tuple[descriptor_pb2.DescriptorProto, ...] = (),
) -> descriptor_pb2.DescriptorProto:
    message = descriptor_pb2.DescriptorProto(name=name)
    message.field.extend(fields)
    message.nested_type.extend(nested)
    return message


def _map_field(
    owner: str, name: str, number: int, value_type: str
) -> tuple[descriptor_pb2.FieldDescriptorProto, descriptor_pb2.DescriptorProto]:
    """Return the field and synthetic entry message for ``map<string, V>``."""
    entry_name = "".join(part.title() for part in name.split("_")) + "Entry"
    entry = _message(
        entry_name,
        _field("key", 1, _STRING),
        _field("value", 2, _MESSAGE, type_name=value_type),
    )
    entry.options.map_entry = True
    field = _field(
        name, number, _MESSAGE, repeated=True, type_name=_ref(f"{owner}.{entry_name}")
    )
    return field, entry


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    fetched_field, fetched_entry = _map_field(
        "FetchResponse", "vectors", 1, _ref("Vector")
    )
    namespaces_field, namespaces_entry = _map_field(
        "DescribeIndexStatsResponse", "namespaces", 1, _ref("NamespaceSummary")
    )

    messages = [
        _message(
            "SparseValues",
            _field("indices", 1, _UINT32, repeated=True),
            _field("values", 2, _FLOAT, repeated=True),
        ),
        _message(
            "Vector",
            _field("id", 1, _STRING),
            _field("values", 2, _FLOAT, repeated=True),
            _field("metadata", 3, _MESSAGE, type_name=_STRUCT),
            _field("sparse_values", 4, _MESSAGE, type_name=_ref("SparseValues")),
        ),
        _message(
            "ScoredVector",
            _field("id", 1, _STRING),
            _field("score", 2, _FLOAT),
            _field("values", 3, _FLOAT, repeated=True),
            _field("metadata", 4, _MESSAGE, type_name=_STRUCT),
            _field("sparse_values", 5, _MESSAGE, type_name=_ref("SparseValues")),
        ),
        _message("Usage", _field("read_units", 1, _UINT32)),
        _message(
            "UpsertRequest",
            _field("vectors", 1, _MESSAGE, repeated=True, type_name=_ref("Vector")),
            _field("namespace", 2, _STRING),
        ),
        _message("UpsertResponse", _field("upserted_count", 1, _UINT32)),
        _message(
            "DeleteRequest",
            _field("ids", 1, _STRING, repeated=True),
            _field("delete_all", 2, _BOOL),
            _field("namespace", 3, _STRING),
            _field("filter", 4, _MESSAGE, type_name=_STRUCT),
        ),
        _message("DeleteResponse"),
        _message(
            "FetchRequest",
            _field("ids", 1, _STRING, repeated=True),
            _field("namespace", 2, _STRING),
        ),
        _message(
            "FetchResponse",
            fetched_field,
            _field("namespace", 2, _STRING),
            _field("usage", 3, _MESSAGE, type_name=_ref("Usage")),
            nested=(fetched_entry,),
        ),
        _message(
            "ListRequest",
            _field("prefix", 1, _STRING),
            _field("limit", 2, _UINT32),
            _field("pagination_token", 3, _STRING),
            _field("namespace", 4, _STRING),
        ),
        _message("Pagination", _field("next", 1, _STRING)),
        _message("ListItem", _field("id", 1, _STRING)),
        _message(
            "ListResponse",
            _field("vectors", 1, _MESSAGE, repeated=True, type_name=_ref("ListItem")),
            _field("pagination", 2, _MESSAGE, type_name=_ref("Pagination")),
            _field("namespace", 3, _STRING),
            _field("usage", 4, _MESSAGE, type_name=_ref("Usage")),
        ),
        _message(
            "QueryRequest",
            _field("namespace", 1, _STRING),
            _field("top_k", 2, _UINT32),
            _field("filter", 3, _MESSAGE, type_name=_STRUCT),
            _field("include_values", 4, _BOOL),
            _field("include_metadata", 5, _BOOL),
            _field("vector", 7, _FLOAT, repeated=True),
            _field("id", 8, _STRING),
            _field("sparse_vector", 9, _MESSAGE, type_name=_ref("SparseValues")),
        ),
        _message(
            "QueryResponse",
            _field(
                "matches", 2, _MESSAGE, repeated=True, type_name=_ref("ScoredVector")
            ),
            _field("namespace", 3, _STRING),
            _field("usage", 4, _MESSAGE, type_name=_ref("Usage")),
        ),
        _message(
            "UpdateRequest",
            _field("id", 1, _STRING),
            _field("values", 2, _FLOAT, repeated=True),
            _field("sparse_values", 3, _MESSAGE, type_name=_ref("SparseValues")),
            _field("set_metadata", 4, _MESSAGE, type_name=_STRUCT),
            _field("namespace", 5, _STRING),
        ),
        _message("UpdateResponse"),
        _message(
            "DescribeIndexStatsRequest",
            _field("filter", 1, _MESSAGE, type_name=_STRUCT),
        ),
        _message("NamespaceSummary", _field("vector_count", 1, _UINT32)),
        _message(
            "DescribeIndexStatsResponse",
            namespaces_field,
            _field("dimension", 2, _UINT32),
            _field("index_fullness", 3, _FLOAT),
            _field("total_vector_count", 4, _UINT32),
            nested=(namespaces_entry,),
        ),
    ]

    file_proto = descriptor_pb2.FileDescriptorProto(
        name="pinecone_sdk/db_data.proto",
        package=PACKAGE,
        syntax="proto3",
        dependency=["google/protobuf/struct.proto"],
    )
    file_proto.message_type.extend(messages)
    return file_proto


_pool = descriptor_pool.Default()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message_class(name: str) -> type:
    return message_factory.GetMessageClass(
        _pool.FindMessageTypeByName(f"{PACKAGE}.{name}")
    )


SparseValues = _message_class("SparseValues")
Vector = _message_class("Vector")
ScoredVector = _message_class("ScoredVector")
Usage = _message_class("Usage")
UpsertRequest = _message_class("UpsertRequest")
UpsertResponse = _message_class("UpsertResponse")
DeleteRequest = _message_class("DeleteRequest")
DeleteResponse = _message_class("DeleteResponse")
FetchRequest = _message_class("FetchRequest")
FetchResponse = _message_class("FetchResponse")
ListRequest = _message_class("ListRequest")
ListResponse = _message_class("ListResponse")
QueryRequest = _message_class("QueryRequest")
QueryResponse = _message_class("QueryResponse")
UpdateRequest = _message_class("UpdateRequest")
UpdateResponse = _message_class("UpdateResponse")
DescribeIndexStatsRequest = _message_class("DescribeIndexStatsRequest")
DescribeIndexStatsResponse = _message_class("DescribeIndexStatsResponse")
Pagination = _message_class("Pagination")
ListItem = _message_class("ListItem")
NamespaceSummary = _message_class("NamespaceSummary")
