"""Tests for the HTML pages and redirect handler."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from web_app import create_app
from config import Config


@pytest.fixture
def app(storage, store, service):
    """Create test FastAPI app."""
    config = Config(storage_backend="memory", base_url="http://fallback.example")
    return create_app(
        storage_instance=storage,
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest_asyncio.fixture
async def client(app):
    """Create test client (redirects are not followed)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
class TestShortenPage:
    """Test the shorten form."""
    
    async def test_homepage(self, client):
        """The form is served with the default validity."""
        response = await client.get("/")
        
        assert response.status_code == 200
        assert "Create Short URL" in response.text
        assert 'value="30"' in response.text
    
    async def test_submit(self, client, store):
        """A valid submission shows the short link and its expiry."""
        response = await client.post(
            "/",
            data={"url": "https://example.com", "validity": "10", "custom_code": "abc123"},
        )
        
        assert response.status_code == 200
        assert "http://testserver/#/abc123" in response.text
        assert "Expires: 2023-11-14 22:23:20 UTC" in response.text
        assert store.lookup("abc123").original == "https://example.com"
    
    async def test_submit_defaults(self, client, store):
        """Blank validity and code fall back to defaults."""
        response = await client.post(
            "/",
            data={"url": "https://example.com", "validity": "", "custom_code": ""},
        )
        
        assert response.status_code == 200
        [record] = store.list_all()
        assert len(record.code) == 6
        assert record.short in response.text
    
    async def test_submit_invalid_url(self, client, storage):
        """An invalid URL shows an inline error and creates nothing."""
        response = await client.post("/", data={"url": "not a url"})
        
        assert response.status_code == 400
        assert "Invalid URL" in response.text
        assert storage.get_item() is None
    
    async def test_submit_invalid_validity(self, client, storage):
        """A non-numeric validity shows an inline error."""
        response = await client.post(
            "/",
            data={"url": "https://example.com", "validity": "soon"},
        )
        
        assert response.status_code == 400
        assert "Validity must be a number" in response.text
        assert storage.get_item() is None
    
    @pytest.mark.parametrize("validity", ["inf", "nan", "1e20"])
    async def test_submit_out_of_range_validity(self, client, storage, validity):
        """Non-finite or huge validities show an inline error."""
        response = await client.post(
            "/",
            data={"url": "https://example.com", "validity": validity},
        )
        
        assert response.status_code == 400
        assert "Validity must be" in response.text
        assert storage.get_item() is None


@pytest.mark.asyncio
class TestStatsPage:
    """Test the statistics table."""
    
    async def test_empty(self, client):
        """An empty store says so."""
        response = await client.get("/stats")
        
        assert response.status_code == 200
        assert "No URLs yet." in response.text
    
    async def test_table(self, client, service, clock):
        """Each record is listed with its clicks; expired ones are marked."""
        service.shorten("https://example.com/one", validity_minutes=1, custom_code="one")
        service.shorten("https://example.com/two", validity_minutes=60, custom_code="two")
        service.resolve("two")
        clock.advance(minutes=5)
        
        response = await client.get("/stats")
        
        assert response.status_code == 200
        text = response.text
        assert "https://example.com/one" in text
        assert "https://example.com/two" in text
        assert text.index("https://example.com/one") < text.index("https://example.com/two")
        assert text.count("(expired)") == 1


@pytest.mark.asyncio
class TestRedirect:
    """Test the redirect handler."""
    
    async def test_redirect(self, client, service, store):
        """A known code redirects and records the referrer."""
        service.shorten("https://example.com/target", custom_code="go")
        
        response = await client.get("/go", headers={"Referer": "https://ref.example"})
        
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/target"
        record = store.lookup("go")
        assert record.clicks == 1
        assert record.history[0].referrer == "https://ref.example"
    
    async def test_redirect_expired(self, client, service, clock):
        """Expired links still redirect."""
        service.shorten("https://example.com/old", validity_minutes=1, custom_code="old")
        clock.advance(minutes=2)
        
        response = await client.get("/old")
        
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/old"
    
    async def test_unknown_code(self, client, storage):
        """Unknown codes send the user back to the form."""
        response = await client.get("/missing")
        
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert storage.get_item() is None
    
    async def test_forwarded_referrer_preferred(self, client, service, store):
        """A forwarded fragment link records the page that linked to it."""
        service.shorten("https://example.com/target", custom_code="go")
        
        response = await client.get(
            "/go",
            params={"ref": "https://ext.example/post"},
            headers={"Referer": "http://testserver/"},
        )
        
        assert response.status_code == 302
        assert store.lookup("go").history[0].referrer == "https://ext.example/post"
    
    async def test_forwarded_empty_referrer(self, client, service, store):
        """A direct visit forwarded from the form page records no referrer."""
        service.shorten("https://example.com/target", custom_code="go")
        
        await client.get("/go?ref=", headers={"Referer": "http://testserver/"})
        
        assert store.lookup("go").history[0].referrer == ""
    
    async def test_form_page_forwards_referrer(self, client):
        """The form page passes document.referrer along with the code."""
        response = await client.get("/")
        
        assert "encodeURIComponent(document.referrer)" in response.text
