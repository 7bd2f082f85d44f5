from interviewprep_router.sessions.store import ChatSessionStore

__all__ = ["ChatSessionStore"]
