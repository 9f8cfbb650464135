import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, text_format

from protoc_doc.parser.descriptor_parser import parse_file_descriptor

ORDER_PROTO = """
name: "shop/order.proto"
package: "com.example.shop"
syntax: "proto3"
message_type {
  name: "Order"
  field { name: "id" number: 1 label: LABEL_OPTIONAL type: TYPE_INT64 }
  field { name: "items" number: 2 label: LABEL_REPEATED type: TYPE_MESSAGE type_name: ".com.example.shop.Order.Item" }
  field { name: "labels" number: 3 label: LABEL_REPEATED type: TYPE_MESSAGE type_name: ".com.example.shop.Order.LabelsEntry" }
  field { name: "status" number: 4 label: LABEL_OPTIONAL type: TYPE_ENUM type_name: ".com.example.shop.Order.Status" }
  field { name: "note" number: 5 label: LABEL_OPTIONAL type: TYPE_STRING oneof_index: 0 proto3_optional: true }
  field { name: "card" number: 6 label: LABEL_OPTIONAL type: TYPE_STRING oneof_index: 1 }
  field { name: "cash" number: 7 label: LABEL_OPTIONAL type: TYPE_BOOL oneof_index: 1 options { deprecated: true } }
  nested_type {
    name: "Item"
    field { name: "sku" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING }
    nested_type {
      name: "Detail"
      field { name: "text" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING }
    }
  }
  nested_type {
    name: "LabelsEntry"
    field { name: "key" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING }
    field { name: "value" number: 2 label: LABEL_OPTIONAL type: TYPE_STRING }
    options { map_entry: true }
  }
  enum_type {
    name: "Status"
    value { name: "STATUS_UNKNOWN" number: 0 }
    value { name: "STATUS_PAID" number: 1 options { deprecated: true } }
  }
  oneof_decl { name: "_note" }
  oneof_decl { name: "payment" }
}
message_type { name: "Cart" }
message_type { name: "Basket" options { deprecated: true } }
enum_type {
  name: "Currency"
  value { name: "CURRENCY_UNKNOWN" number: 0 }
}
service {
  name: "OrderService"
  method {
    name: "GetOrder"
    input_type: ".com.example.shop.Cart"
    output_type: ".com.example.shop.Order"
  }
  method {
    name: "Watch"
    input_type: ".com.example.shop.Cart"
    output_type: ".com.example.shop.Order"
    server_streaming: true
    options { deprecated: true idempotency_level: NO_SIDE_EFFECTS }
  }
}
service { name: "AdminService" }
options { deprecated: true }
source_code_info {
  location { path: [12] leading_comments: " Order management API.\\n" }
  location { path: [4, 0] leading_comments: " An order.\\n @exclude\\n" }
  location { path: [4, 0, 2, 0] leading_comments: " Order id.\\n @required\\n" }
  location { path: [4, 0, 3, 0] leading_comments: " A line item.\\n" }
  location { path: [4, 1] trailing_comments: " Cart trailer.\\n" leading_detached_comments: " detached\\n" }
  location { path: [4, 0, 4, 0, 2, 1] leading_comments: " Paid in full.\\n" }
  location { path: [6, 0] leading_comments: " Orders.\\n @title Order API\\n" }
  location {
    path: [6, 0, 2, 0]
    leading_comments: " Fetch one order.\\n @action read\\n @version v2\\n @title Get order\\n"
  }
}
"""

LEGACY_PROTO = """
name: "legacy.proto"
package: "legacy"
message_type {
  name: "Base"
  field { name: "count" number: 1 label: LABEL_OPTIONAL type: TYPE_INT32 default_value: "7" }
  field { name: "tag" number: 2 label: LABEL_REQUIRED type: TYPE_STRING }
  field { name: "ids" number: 3 label: LABEL_REPEATED type: TYPE_UINT32 }
  extension_range { start: 100 end: 200 }
  extension {
    name: "scoped"
    number: 101
    label: LABEL_OPTIONAL
    type: TYPE_STRING
    extendee: ".legacy.Base"
  }
}
extension {
  name: "top"
  number: 100
  label: LABEL_OPTIONAL
  type: TYPE_MESSAGE
  type_name: ".legacy.Base"
  extendee: ".legacy.Base"
}
extension {
  name: "alpha"
  number: 102
  label: LABEL_OPTIONAL
  type: TYPE_BOOL
  extendee: ".legacy.Base"
}
source_code_info {
  location { path: [7, 0] leading_comments: " Top level extension.\\n" }
  location { path: [4, 0, 6, 0] leading_comments: " Scoped extension.\\n" }
}
"""


ACME_OPTIONS_PROTO = """
name: "acme/options.proto"
package: "acme"
dependency: "google/protobuf/descriptor.proto"
extension { name: "owner" number: 50001 label: LABEL_OPTIONAL type: TYPE_STRING extendee: ".google.protobuf.MessageOptions" }
extension { name: "deprecated" number: 50002 label: LABEL_OPTIONAL type: TYPE_BOOL extendee: ".google.protobuf.MessageOptions" }
extension { name: "blob" number: 50003 label: LABEL_OPTIONAL type: TYPE_BYTES extendee: ".google.protobuf.MessageOptions" }
extension { name: "reviewers" number: 50004 label: LABEL_REPEATED type: TYPE_STRING extendee: ".google.protobuf.MethodOptions" }
"""


def parse_text(text: str) -> descriptor_pb2.FileDescriptorProto:
    return text_format.Parse(text, descriptor_pb2.FileDescriptorProto())


@pytest.fixture
def order_proto():
    return parse_text(ORDER_PROTO)


@pytest.fixture
def legacy_proto():
    return parse_text(LEGACY_PROTO)


@pytest.fixture
def order_file(order_proto):
    return parse_file_descriptor(order_proto)


@pytest.fixture
def legacy_file(legacy_proto):
    return parse_file_descriptor(legacy_proto)


@pytest.fixture
def options_pool():
    """A descriptor pool holding the ``acme`` custom option extensions."""
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(descriptor_pb2.DESCRIPTOR.serialized_pb)
    pool.AddSerializedFile(parse_text(ACME_OPTIONS_PROTO).SerializeToString())
    return pool


@pytest.fixture
def pool_message(options_pool):
    """Instantiate a message type of ``options_pool``, optionally copying ``source`` into it."""

    def build(full_name: str, source=None):
        message = message_factory.GetMessageClass(options_pool.FindMessageTypeByName(full_name))()
        if source is not None:
            message.ParseFromString(source.SerializeToString())
        return message

    return build
