"""
Journal entries: free-form title and content with full-text search.
"""

from models.journal import JournalEntry
from models.schemas import JournalEntryCreate, JournalEntryOut, JournalEntryUpdate
from routers.resource_router import Resource, build_router, search_filter


journal_resource = Resource(
    path="/journal-entries",
    model=JournalEntry,
    create_schema=JournalEntryCreate,
    update_schema=JournalEntryUpdate,
    out_schema=JournalEntryOut,
    label="Journal entry",
    delete_key="deleted",
    filters=[search_filter("search", JournalEntry.title, JournalEntry.content)],
    tracks_updated_at=True,
    tag="journal",
)

router = build_router(journal_resource)
