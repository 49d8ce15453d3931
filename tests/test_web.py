import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route
from starlette.testclient import TestClient

from jsend_envelope import InvalidHeaderValue, InvalidStatus, JSend
from jsend_envelope.web import JSendResponse, http_status_for


async def show_post(request: Request) -> JSendResponse:
    post_id = int(request.path_params["post_id"])
    if post_id != 1:
        return JSendResponse(JSend.error("Post not found", 404))
    return JSendResponse(
        JSend.success({"post": {"id": 1, "title": "foo", "author": "bar"}}),
        headers={"Cache-Control": "no-store"},
    )


async def create_post(request: Request) -> JSendResponse:
    return JSendResponse({"status": "fail", "data": {"title": "A title is required"}})


def _build_app() -> Starlette:
    return Starlette(
        routes=[
            Route("/posts/{post_id}", show_post, methods=["GET"]),
            Route("/posts", create_post, methods=["POST"]),
        ]
    )


class HttpStatusTests(unittest.TestCase):
    def test_status_mapping(self):
        self.assertEqual(http_status_for(JSend.success()), 200)
        self.assertEqual(http_status_for(JSend.fail()), 400)
        self.assertEqual(http_status_for(JSend.error("boom")), 500)
        self.assertEqual(http_status_for(JSend.error("boom", 23)), 500)
        self.assertEqual(http_status_for(JSend.error("gone", 410)), 410)


class JSendResponseTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(_build_app())

    def test_success_response(self):
        response = self.client.get("/posts/1")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "application/json;charset=utf-8")
        self.assertEqual(response.headers["cache-control"], "no-store")
        self.assertEqual(
            response.text,
            '{"status":"success","data":{"post":{"id":1,"title":"foo","author":"bar"}}}',
        )
        self.assertEqual(int(response.headers["content-length"]), len(response.content))

    def test_error_response_uses_error_code(self):
        response = self.client.get("/posts/2")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"status": "error", "message": "Post not found", "code": 404})

    def test_mapping_content_is_validated(self):
        response = self.client.post("/posts")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"status": "fail", "data": {"title": "A title is required"}})

    def test_explicit_status_code_wins(self):
        response = JSendResponse(JSend.success(), status_code=202)

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.body, b'{"status":"success","data":null}')

    def test_json_content_is_decoded(self):
        response = JSendResponse('{"status":"fail","data":null}')

        self.assertTrue(response.envelope.is_fail())

    def test_invalid_content_rejected(self):
        with self.assertRaises(InvalidStatus):
            JSendResponse({"status": "maybe"})

    def test_invalid_header_rejected(self):
        with self.assertRaises(InvalidHeaderValue):
            JSendResponse(JSend.success(), headers={"X-Bad": "a\r\nb"})


if __name__ == "__main__":
    unittest.main()
