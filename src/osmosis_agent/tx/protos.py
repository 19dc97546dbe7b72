"""Protobuf message classes for Osmosis poolmanager swaps.

cosmpy ships the Cosmos SDK protos but not Osmosis' own modules, so the
poolmanager swap messages are declared here as a FileDescriptorProto and
registered in the default descriptor pool next to cosmpy's
cosmos.base.v1beta1.Coin. The wire layout matches
osmosis/poolmanager/v1beta1/{swap_route,tx}.proto.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from cosmpy.protos.cosmos.base.v1beta1 import coin_pb2

PACKAGE = "osmosis.poolmanager.v1beta1"
_FILE_NAME = "osmosis_agent/osmosis/poolmanager/v1beta1/tx.proto"

_Field = descriptor_pb2.FieldDescriptorProto


def _string(name: str, number: int) -> _Field:
    return _Field(name=name, number=number, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL)


def _uint64(name: str, number: int) -> _Field:
    return _Field(name=name, number=number, type=_Field.TYPE_UINT64, label=_Field.LABEL_OPTIONAL)


def _message(name: str, number: int, type_name: str, repeated: bool = False) -> _Field:
    return _Field(
        name=name,
        number=number,
        type=_Field.TYPE_MESSAGE,
        type_name=type_name,
        label=_Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
    )


def _local(name: str) -> str:
    return f".{PACKAGE}.{name}"


_COIN = ".cosmos.base.v1beta1.Coin"

_MESSAGES: dict[str, list[_Field]] = {
    "SwapAmountInRoute": [_uint64("pool_id", 1), _string("token_out_denom", 2)],
    "SwapAmountOutRoute": [_uint64("pool_id", 1), _string("token_in_denom", 2)],
    "SwapAmountInSplitRoute": [
        _message("pools", 1, _local("SwapAmountInRoute"), repeated=True),
        _string("token_in_amount", 2),
    ],
    "SwapAmountOutSplitRoute": [
        _message("pools", 1, _local("SwapAmountOutRoute"), repeated=True),
        _string("token_out_amount", 2),
    ],
    "MsgSwapExactAmountIn": [
        _string("sender", 1),
        _message("routes", 2, _local("SwapAmountInRoute"), repeated=True),
        _message("token_in", 3, _COIN),
        _string("token_out_min_amount", 4),
    ],
    "MsgSwapExactAmountOut": [
        _string("sender", 1),
        _message("routes", 2, _local("SwapAmountOutRoute"), repeated=True),
        _string("token_in_max_amount", 3),
        _message("token_out", 4, _COIN),
    ],
    "MsgSplitRouteSwapExactAmountIn": [
        _string("sender", 1),
        _message("routes", 2, _local("SwapAmountInSplitRoute"), repeated=True),
        _string("token_in_denom", 3),
        _string("token_out_min_amount", 4),
    ],
    "MsgSplitRouteSwapExactAmountOut": [
        _string("sender", 1),
        _message("routes", 2, _local("SwapAmountOutSplitRoute"), repeated=True),
        _string("token_out_denom", 3),
        _string("token_in_max_amount", 4),
    ],
}


def _load_file():
    pool = descriptor_pool.Default()
    try:
        return pool.FindFileByName(_FILE_NAME)
    except KeyError:
        pass

    file_proto = descriptor_pb2.FileDescriptorProto(
        name=_FILE_NAME,
        package=PACKAGE,
        syntax="proto3",
        dependency=[coin_pb2.DESCRIPTOR.name],
    )
    for name, fields in _MESSAGES.items():
        file_proto.message_type.add(name=name, field=fields)

    return pool.AddSerializedFile(file_proto.SerializeToString())


_FILE = _load_file()


def _message_class(name: str):
    return message_factory.GetMessageClass(_FILE.message_types_by_name[name])


SwapAmountInRoute = _message_class("SwapAmountInRoute")
SwapAmountOutRoute = _message_class("SwapAmountOutRoute")
SwapAmountInSplitRoute = _message_class("SwapAmountInSplitRoute")
SwapAmountOutSplitRoute = _message_class("SwapAmountOutSplitRoute")
MsgSwapExactAmountIn = _message_class("MsgSwapExactAmountIn")
MsgSwapExactAmountOut = _message_class("MsgSwapExactAmountOut")
MsgSplitRouteSwapExactAmountIn = _message_class("MsgSplitRouteSwapExactAmountIn")
MsgSplitRouteSwapExactAmountOut = _message_class("MsgSplitRouteSwapExactAmountOut")


def type_url(message) -> str:
    """Any type URL of a protobuf message, e.g. /osmosis.poolmanager.v1beta1.MsgSwapExactAmountIn."""
    return f"/{message.DESCRIPTOR.full_name}"
