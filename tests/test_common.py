"""Tests for common utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from quicklink.common.validators import is_valid_url, is_valid_short_code
from quicklink.common.headers import extract_forwarded_headers, build_base_url
from quicklink.common.url_builder import build_short_url
from quicklink.common.timestamps import from_ms, to_ms, to_iso, parse_iso


class TestValidators:
    """Test validation utilities."""
    
    def test_valid_urls(self):
        """Absolute URLs with a scheme and host are accepted."""
        for url in (
            "https://example.com",
            "http://example.com/path",
            "https://sub.example.com:8080/path?query=value#frag",
            "ftp://files.example.com/pub",
        ):
            valid, error = is_valid_url(url)
            assert valid, f"{url}: {error}"
    
    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_url("not-a-url")
        assert not valid
        assert "scheme" in error.lower()
        
        valid, error = is_valid_url("https://")
        assert not valid
        assert "host" in error.lower()
        
        valid, _ = is_valid_url("mailto:someone@example.com")
        assert not valid
        
        valid, _ = is_valid_url("https://exa mple.com")
        assert not valid
        
        valid, _ = is_valid_url("https://example.com:99999")
        assert not valid
    
    def test_allowed_schemes(self):
        """A scheme whitelist rejects other schemes."""
        valid, _ = is_valid_url("https://example.com", allowed_schemes=["http", "https"])
        assert valid
        
        valid, error = is_valid_url("ftp://example.com", allowed_schemes=["http", "https"])
        assert not valid
        assert "ftp" in error
    
    def test_valid_short_codes(self):
        """Test valid short code validation."""
        for code in ("abc123", "x", "test-code", "Test_Code"):
            valid, error = is_valid_short_code(code)
            assert valid, f"{code}: {error}"
    
    def test_invalid_short_codes(self):
        """Test invalid short code validation."""
        valid, error = is_valid_short_code("")
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_short_code("a" * 33)
        assert not valid
        assert "at most" in error.lower()
        
        valid, _ = is_valid_short_code("abc@123")
        assert not valid
        
        valid, _ = is_valid_short_code("a/b")
        assert not valid
        
        valid, error = is_valid_short_code("Stats")
        assert not valid
        assert "reserved" in error.lower()


class TestHeaders:
    """Test request origin helpers."""
    
    def test_extract_forwarded_headers(self):
        """Test forwarded header extraction."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "1.2.3.4",
        }
        
        result = extract_forwarded_headers(headers)
        assert result["forwarded_proto"] == "https"
        assert result["forwarded_host"] == "example.com"
        assert result["forwarded_for"] == "1.2.3.4"
    
    def test_build_base_url_from_headers(self):
        """Forwarded headers win over the request's own host."""
        headers = {
            "x-forwarded-proto": "https",
            "x-forwarded-host": "short.example.com",
        }
        
        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="internal:9200",
        )
        
        assert base_url == "https://short.example.com"
    
    def test_build_base_url_from_request(self):
        """Request scheme and host are used without forwarded headers."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="testserver",
        )
        
        assert base_url == "http://testserver"
    
    def test_build_base_url_fallback(self):
        """Test base URL fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200/",
        )
        
        assert base_url == "http://localhost:9200"


class TestURLBuilder:
    """Test short link building."""
    
    def test_fragment_route_by_default(self):
        """The default prefix yields origin + /#/ + code."""
        url = build_short_url("abc123", "https://example.com")
        
        assert url == "https://example.com/#/abc123"
    
    def test_trailing_slash_on_origin(self):
        """A trailing slash on the origin is not doubled."""
        url = build_short_url("abc123", "https://example.com/")
        
        assert url == "https://example.com/#/abc123"
    
    def test_path_route(self):
        """An empty prefix yields origin + / + code."""
        url = build_short_url("abc123", "https://example.com", route_prefix="")
        
        assert url == "https://example.com/abc123"
    
    def test_custom_prefix(self):
        """Test short link building with a path prefix."""
        url = build_short_url("abc123", "https://example.com", route_prefix="/s/")
        
        assert url == "https://example.com/s/abc123"


class TestTimestamps:
    """Test millisecond timestamp helpers."""
    
    def test_from_ms(self):
        """Epoch milliseconds map to an exact UTC datetime."""
        value = from_ms(1_700_000_000_123)
        
        assert value == datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
        assert to_ms(value) == 1_700_000_000_123
    
    def test_to_iso(self):
        """ISO output has millisecond precision and a Z suffix."""
        assert to_iso(from_ms(1_700_000_000_000)) == "2023-11-14T22:13:20.000Z"
    
    def test_to_iso_converts_offsets(self):
        """Non-UTC datetimes are converted before formatting."""
        value = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        
        assert to_iso(value) == "2024-01-01T12:00:00.000Z"
    
    def test_parse_iso(self):
        """Z, offsets and naive values all parse to aware UTC."""
        expected = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        
        assert parse_iso("2024-01-01T12:00:00.000Z") == expected
        assert parse_iso("2024-01-01T14:00:00+02:00") == expected
        assert parse_iso("2024-01-01T12:00:00") == expected
        assert parse_iso(expected) == expected
    
    def test_parse_iso_rejects_garbage(self):
        """Unparseable values raise ValueError."""
        with pytest.raises(ValueError):
            parse_iso("yesterday")
        with pytest.raises(ValueError):
            parse_iso(12345)
