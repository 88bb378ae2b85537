from collections.abc import Callable

import httpx

API_KEY = "test-finnhub-key"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(status_code: int, payload) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler
