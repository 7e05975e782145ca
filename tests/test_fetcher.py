import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from penal_code.fetcher import PenalCodeFetcher, load_json_file, load_penal_code


FIXTURES = Path(__file__).parent / "fixtures"


class DummyResponse:
    def __init__(self, payload, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self.payload, str):
            return json.loads(self.payload)
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FetcherTests(unittest.TestCase):
    def setUp(self):
        self.payload = json.loads((FIXTURES / "penal_code.json").read_text(encoding="utf-8"))
        sleep_patch = mock.patch("penal_code.fetcher.time.sleep")
        self.sleep = sleep_patch.start()
        self.addCleanup(sleep_patch.stop)

    def test_fetch_penal_code_requests_named_file(self):
        fetcher = PenalCodeFetcher(base_url="https://cdn.example.test/", delay=0)
        calls = []

        def fake_get(url, params=None, timeout=None):
            calls.append((url, params))
            return DummyResponse(self.payload)

        fetcher.session.get = fake_get  # stub network

        data = fetcher.fetch_penal_code()
        self.assertEqual(calls, [("https://cdn.example.test/", {"file": "gtaw_penal_code.json"})])
        self.assertEqual(data["101"]["charge"], "Assault")

    def test_rate_limit_is_retried(self):
        fetcher = PenalCodeFetcher(base_url="https://cdn.example.test/", delay=0)
        responses = [DummyResponse({}, status_code=429), DummyResponse(self.payload)]
        fetcher.session.get = lambda url, params=None, timeout=None: responses.pop(0)

        data = fetcher.fetch_penal_code()
        self.assertIn("204", data)
        self.sleep.assert_called()

    def test_transport_errors_raise_after_retries(self):
        fetcher = PenalCodeFetcher(base_url="https://cdn.example.test/", delay=0)

        def failing_get(url, params=None, timeout=None):
            raise requests.ConnectionError("offline")

        fetcher.session.get = failing_get

        with self.assertRaises(requests.ConnectionError):
            fetcher.fetch_penal_code()

    def test_non_object_payload_is_rejected(self):
        fetcher = PenalCodeFetcher(base_url="https://cdn.example.test/", delay=0)
        fetcher.session.get = lambda url, params=None, timeout=None: DummyResponse([1, 2, 3])

        with self.assertRaises(ValueError):
            fetcher.fetch_penal_code()

    def test_fetch_without_base_url_is_rejected(self):
        fetcher = PenalCodeFetcher(base_url="", delay=0)
        with self.assertRaises(ValueError):
            fetcher.fetch_file("gtaw_penal_code.json")


class LocalLoadTests(unittest.TestCase):
    def test_load_penal_code_from_path(self):
        data = load_penal_code(str(FIXTURES / "penal_code.json"))
        self.assertEqual(set(data), {"101", "204", "602", "000", "broken"})

    def test_load_penal_code_uses_fetcher_for_urls(self):
        fetcher = mock.Mock(spec=PenalCodeFetcher)
        fetcher.fetch_penal_code.return_value = {"101": {}}

        data = load_penal_code("https://cdn.example.test/", fetcher=fetcher)
        self.assertEqual(data, {"101": {}})
        fetcher.fetch_penal_code.assert_called_once_with()

    def test_malformed_json_names_the_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ValueError) as ctx:
                load_json_file(path)
            self.assertIn("bad.json", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
