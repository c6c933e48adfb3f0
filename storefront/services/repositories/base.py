"""Base repository with shared Supabase client."""

from supabase import Client


class BaseRepository:
    """Base class for all repositories.

    Holds the sync Supabase client; repository methods are async so routers
    can await them uniformly.
    """

    def __init__(self, client: Client) -> None:
        self.client = client
