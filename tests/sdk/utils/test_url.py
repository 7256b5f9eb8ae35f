import pytest

from storedesk._utils import last_segment, normalize_path


class TestNormalizePath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("orders/123", "orders/123"),
            ("/orders/123", "orders/123"),
            ("v1/orders/123", "orders/123"),
            ("/v1/orders/123", "orders/123"),
            ("/v1/v1/orders", "v1/orders"),
            ("/v10/orders", "v10/orders"),
            ("orders?page=2", "orders?page=2"),
            ("", ""),
        ],
    )
    def test_normalize_path(self, path: str, expected: str):
        assert normalize_path(path) == expected

    def test_idempotent_for_unversioned_paths(self):
        once = normalize_path("/customers/7")
        assert normalize_path(once) == once


class TestLastSegment:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("orders/123", "123"),
            ("orders/123/", "123"),
            ("orders?page=1", "orders"),
            ("", ""),
        ],
    )
    def test_last_segment(self, path: str, expected: str):
        assert last_segment(path) == expected
