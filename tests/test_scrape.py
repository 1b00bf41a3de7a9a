import unittest

import requests

from loiwatch.scrape import USER_AGENT, fetch_page


class FakeResponse:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response: FakeResponse) -> None:
        self.response = response
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        return self.response


class TestFetchPage(unittest.TestCase):
    def test_returns_html(self) -> None:
        session = FakeSession(FakeResponse("<html>ok</html>"))
        html = fetch_page("https://example.org/loi", timeout=5, session=session)

        self.assertEqual(html, "<html>ok</html>")
        self.assertEqual(session.calls, [("https://example.org/loi", {"User-Agent": USER_AGENT}, 5)])

    def test_http_error_raises(self) -> None:
        session = FakeSession(FakeResponse("gone", status=404))
        with self.assertRaises(requests.HTTPError):
            fetch_page("https://example.org/loi", session=session)


if __name__ == "__main__":
    unittest.main()
