"""HTTP directory client tests with ``requests.get`` mocked out."""

from __future__ import annotations

import unittest
from unittest import mock

import requests

from lazyhub.directory.client import DirectoryClient
from lazyhub.directory.errors import (
    DirectoryClientError,
    DirectoryError,
    DirectoryNotFound,
    DirectoryRateLimited,
    DirectoryServerError,
)


def _response(status: int = 200, payload: object = None, reason: str = "OK", headers: dict | None = None):
    resp = mock.Mock()
    resp.status_code = status
    resp.reason = reason
    resp.headers = headers or {}
    resp.json = mock.Mock(return_value=payload)
    return resp


class DirectoryClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cli = DirectoryClient("https://api.example.test/", timeout_seconds=3.0)

    def test_ctor_normalizes_base_and_auth(self) -> None:
        self.assertEqual(self.cli.baseurl, "https://api.example.test")
        self.assertNotIn("Authorization", self.cli._headers)

        authed = DirectoryClient(token="s3cret")
        self.assertEqual(authed._headers["Authorization"], "Bearer s3cret")

    def test_search_requests_page_and_decodes_items(self) -> None:
        payload = {
            "total_count": 2,
            "incomplete_results": False,
            "items": [
                {"id": 583231, "login": "octocat", "avatar_url": "https://a/1", "html_url": "https://g/octocat"},
                {"id": 7, "login": "octo-org"},
            ],
        }
        with mock.patch("requests.get", return_value=_response(payload=payload)) as mockget:
            users = self.cli.search("octo cat", 5)

        self.assertEqual([user.login for user in users], ["octocat", "octo-org"])
        self.assertEqual(users[0].html_url, "https://g/octocat")
        mockget.assert_called_once()
        self.assertEqual(mockget.call_args.args[0], "https://api.example.test/search/users")
        self.assertEqual(mockget.call_args.kwargs["params"], {"q": "octo cat", "per_page": 5})
        self.assertEqual(mockget.call_args.kwargs["timeout"], 3.0)

    def test_blank_search_skips_request(self) -> None:
        with mock.patch("requests.get") as mockget:
            self.assertEqual(self.cli.search("  ", 5), [])
        mockget.assert_not_called()

    def test_list_dependents_sorts_by_update(self) -> None:
        payload = [
            {
                "id": 1,
                "name": "Hello-World",
                "full_name": "octocat/Hello-World",
                "stargazers_count": 42,
                "forks_count": 3,
                "language": "Python",
                "updated_at": "2024-05-01T12:00:00Z",
            }
        ]
        with mock.patch("requests.get", return_value=_response(payload=payload)) as mockget:
            repos = self.cli.list_dependents("octocat")

        self.assertEqual(mockget.call_args.args[0], "https://api.example.test/users/octocat/repos")
        self.assertEqual(mockget.call_args.kwargs["params"], {"sort": "updated", "direction": "desc"})
        self.assertEqual(repos[0].full_name, "octocat/Hello-World")
        self.assertEqual(repos[0].stargazers_count, 42)
        self.assertEqual(repos[0].updated_date(), "2024-05-01")

    def test_get_user_returns_profile(self) -> None:
        payload = {"id": 1, "login": "octocat", "name": "The Octocat", "followers": 9000}
        with mock.patch("requests.get", return_value=_response(payload=payload)):
            user = self.cli.get_user("octocat")
        self.assertEqual(user.name, "The Octocat")
        self.assertEqual(user.followers, 9000)
        self.assertEqual(user.label, "octocat (The Octocat)")

    def test_status_errors_map_to_exception_types(self) -> None:
        cases = [
            (_response(404, reason="Not Found"), DirectoryNotFound),
            (_response(422, reason="Unprocessable"), DirectoryClientError),
            (_response(502, reason="Bad Gateway"), DirectoryServerError),
            (
                _response(403, reason="Forbidden", headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "99"}),
                DirectoryRateLimited,
            ),
        ]
        for resp, error_type in cases:
            with self.subTest(status=resp.status_code):
                with mock.patch("requests.get", return_value=resp):
                    with self.assertRaises(error_type) as ctx:
                        self.cli.search("octo", 5)
                self.assertIsInstance(ctx.exception, DirectoryError)
                self.assertEqual(ctx.exception.status, resp.status_code)

    def test_rate_limit_records_reset(self) -> None:
        resp = _response(429, reason="Too Many", headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700"})
        with mock.patch("requests.get", return_value=resp):
            with self.assertRaises(DirectoryRateLimited) as ctx:
                self.cli.list_dependents("octocat")
        self.assertEqual(ctx.exception.reset_at, 1700)

    def test_transport_failure_becomes_server_error(self) -> None:
        with mock.patch("requests.get", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(DirectoryServerError) as ctx:
                self.cli.search("octo", 5)
        self.assertIsNone(ctx.exception.status)
        self.assertIn("refused", str(ctx.exception))

    def test_bad_json_becomes_server_error(self) -> None:
        resp = _response()
        resp.json.side_effect = ValueError("no json")
        with mock.patch("requests.get", return_value=resp):
            with self.assertRaises(DirectoryServerError):
                self.cli.get_user("octocat")

    def test_unexpected_shape_is_rejected(self) -> None:
        with mock.patch("requests.get", return_value=_response(payload={"message": "nope"})):
            with self.assertRaises(DirectoryServerError):
                self.cli.search("octo", 5)
        with mock.patch("requests.get", return_value=_response(payload={"message": "nope"})):
            with self.assertRaises(DirectoryServerError):
                self.cli.list_dependents("octocat")

    def test_malformed_list_records_are_skipped(self) -> None:
        payload = {"items": [{"id": 1, "login": "ok"}, {"login": "noid"}, "junk"]}
        with mock.patch("requests.get", return_value=_response(payload=payload)):
            with self.assertLogs("lazyhub.directory.client", level="WARNING") as logs:
                users = self.cli.search("octo", 5)
        self.assertEqual([user.login for user in users], ["ok"])
        self.assertEqual(len(logs.records), 2)

        repos = [{"id": 2, "name": "kept"}, {"name": "no-id"}]
        with mock.patch("requests.get", return_value=_response(payload=repos)):
            with self.assertLogs("lazyhub.directory.client", level="WARNING"):
                self.assertEqual([repo.name for repo in self.cli.list_dependents("ok")], ["kept"])

    def test_malformed_profile_becomes_server_error(self) -> None:
        with mock.patch("requests.get", return_value=_response(payload={"login": "noid"})):
            with self.assertRaises(DirectoryServerError) as ctx:
                self.cli.get_user("noid")
        self.assertIsInstance(ctx.exception.cause, ValueError)
        self.assertIn("Unexpected record in response", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
