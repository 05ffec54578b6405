from .issue_store import SqlIssueStore  # noqa: F401
