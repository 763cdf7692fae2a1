"""Tests for the HTML listing, issuance form and scanner page."""

from urllib.parse import unquote

from app.errors import StoreError
from app.stores.memory_store import InMemoryTicketStore


class FailingInsertStore(InMemoryTicketStore):
    def batch_insert(self, codes):
        raise StoreError("write refused")


class FailingClearStore(InMemoryTicketStore):
    def clear(self):
        raise StoreError("delete refused")

    def list_all(self):
        raise StoreError("read refused")


class TestListing:
    def test_empty(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert "0 ticket(s)" in r.text
        assert "No tickets issued yet" in r.text

    def test_lists_stored_tickets(self, client, use_store):
        store = use_store(InMemoryTicketStore())
        store.batch_insert(["GAL-10001", "GAL-10002"])

        r = client.get("/")

        assert "2 ticket(s)" in r.text
        assert "GAL-10001" in r.text
        assert "/download/GAL-10002" in r.text
        assert "/download-all" in r.text

    def test_messages_are_escaped(self, client):
        r = client.get("/", params={"error": "<script>x</script>", "success": "Done"})
        assert "&lt;script&gt;" in r.text
        assert "<script>x</script>" not in r.text
        assert "Done" in r.text

    def test_store_failure_shows_empty_list(self, client, use_store):
        use_store(FailingClearStore())
        r = client.get("/")
        assert r.status_code == 200
        assert "0 ticket(s)" in r.text


class TestGenerateForm:
    def _location(self, r):
        assert r.status_code == 303
        return unquote(r.headers["location"])

    def test_success_redirect(self, client, use_store):
        store = use_store(InMemoryTicketStore())
        r = client.post("/generate", data={"count": "4"}, follow_redirects=False)
        location = self._location(r)
        assert location.startswith("/?success=")
        assert "4 ticket(s) generated" in location
        assert len(store.list_all()) == 4

    def test_blank_count_means_one(self, client, use_store):
        store = use_store(InMemoryTicketStore())
        r = client.post("/generate", data={"count": ""}, follow_redirects=False)
        assert self._location(r).startswith("/?success=")
        assert len(store.list_all()) == 1

    def test_out_of_range(self, client, use_store):
        store = use_store(InMemoryTicketStore())
        store.batch_insert(["GAL-10001"])
        for count in ("0", "101", "-2"):
            r = client.post("/generate", data={"count": count}, follow_redirects=False)
            assert "between 1 and 100" in self._location(r)
        assert [t.code for t in store.list_all()] == ["GAL-10001"]

    def test_template_missing(self, client, use_pipeline, missing_pipeline):
        use_pipeline(missing_pipeline)
        r = client.post("/generate", data={"count": "2"}, follow_redirects=False)
        assert self._location(r) == "/?error=Ticket template not found"

    def test_clear_failure(self, client, use_store):
        use_store(FailingClearStore())
        r = client.post("/generate", data={"count": "2"}, follow_redirects=False)
        assert self._location(r) == "/?error=Could not delete existing tickets"

    def test_save_failure_reported(self, client, use_store):
        use_store(FailingInsertStore())
        r = client.post("/generate", data={"count": "2"}, follow_redirects=False)
        location = self._location(r)
        assert location.startswith("/?error=")
        assert "could not be saved" in location

    def test_followed_redirect_shows_tickets(self, client):
        r = client.post("/generate", data={"count": "2"})
        assert r.status_code == 200
        assert "2 ticket(s)" in r.text


class TestScanPage:
    def test_renders(self, client):
        r = client.get("/scan")
        assert r.status_code == 200
        assert "Ticket Scanner" in r.text
        assert "/verify" in r.text
