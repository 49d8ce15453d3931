import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jsend_envelope import (
    EmptyErrorMessage,
    InvalidDataType,
    InvalidStatus,
    JSend,
    MalformedJSON,
)


class FromJSONTests(unittest.TestCase):
    def setUp(self):
        self.success = JSend.success({"post": {"id": 1, "title": "foo", "author": "bar"}})
        self.success_json = (
            '{"status":"success","data":{"post":{"id":1,"title":"foo","author":"bar"}}}'
        )

    def test_decodes_json_string(self):
        self.assertEqual(JSend.from_json(self.success_json), self.success)

    def test_decodes_bytes(self):
        response = JSend.from_json(b'{"status":"fail","data":null}')

        self.assertTrue(response.is_fail())
        self.assertEqual(response.get_data(), {})

    def test_envelope_passes_through(self):
        self.assertIs(JSend.from_json(self.success), self.success)

    def test_error_document(self):
        response = JSend.from_json(
            '{"status":"error","data":{"id":3},"message":"Server down","code":503}'
        )

        self.assertTrue(response.is_error())
        self.assertEqual(response.get_error_message(), "Server down")
        self.assertEqual(response.get_error_code(), 503)
        self.assertEqual(response.get_data(), {"id": 3})

    def test_invalid_json_raises_malformed_json(self):
        with self.assertRaises(MalformedJSON) as ctx:
            JSend.from_json("fqdsfsd")

        self.assertRegex(
            str(ctx.exception), r"^Unable to decode the submitted JSON string: \w+"
        )
        self.assertIsNotNone(ctx.exception.__cause__)

    def test_non_object_document_rejected(self):
        for payload in ("[1, 2]", "3", '"success"', "null"):
            with self.subTest(payload=payload):
                with self.assertRaises(MalformedJSON):
                    JSend.from_json(payload)

    def test_non_finite_constants_rejected(self):
        with self.assertRaises(MalformedJSON):
            JSend.from_json('{"status":"success","data":{"ratio":NaN}}')

    def test_invalid_utf8_rejected(self):
        with self.assertRaises(MalformedJSON):
            JSend.from_json(b'{"status":"success","data":{"x":"\xff"}}')

    def test_depth_limit(self):
        payload = '{"status":"success","data":{"a":{"b":1}}}'

        self.assertEqual(JSend.from_json(payload, depth=3).get_data(), {"a": {"b": 1}})
        with self.assertRaises(MalformedJSON) as ctx:
            JSend.from_json(payload, depth=2)
        self.assertIn("Maximum stack depth exceeded", str(ctx.exception))

    def test_default_depth_limit_boundary(self):
        def nested(depth):
            # the envelope object and its data object account for two levels
            inner = "[" * (depth - 2) + "]" * (depth - 2)
            return '{"status":"success","data":{"x":' + inner + "}}"

        for depth in (511, 512):
            with self.subTest(depth=depth):
                response = JSend.from_json(nested(depth))
                self.assertTrue(response.is_success())
                self.assertIsInstance(response.get_data()["x"], list)

        with self.assertRaises(MalformedJSON) as ctx:
            JSend.from_json(nested(513))
        self.assertIn("Maximum stack depth exceeded", str(ctx.exception))

    def test_unsupported_input_type_raises_type_error(self):
        with self.assertRaises(TypeError):
            JSend.from_json(object())

    def test_validation_errors_surface_after_decoding(self):
        with self.assertRaises(InvalidStatus):
            JSend.from_json('{"status":"pending"}')


class FromMappingTests(unittest.TestCase):
    def test_missing_status_rejected(self):
        with self.assertRaises(InvalidStatus) as ctx:
            JSend.from_mapping({"data": {"post": 1}, "code": 404})

        self.assertEqual(
            str(ctx.exception),
            "The given status does not conform to Jsend specification",
        )

    def test_reads_wire_keys(self):
        response = JSend.from_mapping(
            {"status": "error", "message": "boom", "code": 500, "data": {"x": 1}}
        )

        self.assertEqual(response, JSend.error("boom", 500, {"x": 1}))

    def test_null_data_is_empty(self):
        self.assertEqual(JSend.from_mapping({"status": "success", "data": None}).get_data(), {})

    def test_error_without_message_rejected(self):
        with self.assertRaises(EmptyErrorMessage):
            JSend.from_mapping({"status": "error", "code": 500})

    def test_non_mapping_rejected(self):
        with self.assertRaises(InvalidDataType):
            JSend.from_mapping(["status", "success"])


if __name__ == "__main__":
    unittest.main()
