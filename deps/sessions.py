from store import SessionStore, store


def get_store() -> SessionStore:
    """
    Session store dependency. Tests swap it via `app.dependency_overrides`.
    """
    return store
