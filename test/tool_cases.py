"""Minimal valid arguments for every tool, and the remote call each one makes first."""

DOC_ID = "doc-1"
PAGE = "Intro"

VALID_ARGS = {
    "list_documents": {},
    "list_pages": {"docId": DOC_ID},
    "create_page": {"docId": DOC_ID, "name": "Notes"},
    "get_page_content": {"docId": DOC_ID, "pageIdOrName": PAGE},
    "replace_page_content": {"docId": DOC_ID, "pageIdOrName": PAGE, "content": "# New"},
    "append_page_content": {"docId": DOC_ID, "pageIdOrName": PAGE, "content": "more"},
    "duplicate_page": {"docId": DOC_ID, "pageIdOrName": PAGE, "newName": "Intro copy"},
    "rename_page": {"docId": DOC_ID, "pageIdOrName": PAGE, "newName": "Overview"},
    "peek_page": {"docId": DOC_ID, "pageIdOrName": PAGE, "numLines": 2},
    "resolve_link": {"url": "https://coda.io/d/Roadmap_ddoc-1/Intro_suIntro"},
}

FIRST_REMOTE_CALL = {
    "list_documents": "list_documents",
    "list_pages": "list_pages",
    "create_page": "create_page",
    "get_page_content": "get_page_content_export",
    "replace_page_content": "update_page",
    "append_page_content": "update_page",
    "duplicate_page": "get_page_content_export",
    "rename_page": "update_page",
    "peek_page": "get_page_content_export",
    "resolve_link": "resolve_link",
}

REQUIRED_FIELDS = {
    "list_documents": [],
    "list_pages": ["docId"],
    "create_page": ["docId", "name"],
    "get_page_content": ["docId", "pageIdOrName"],
    "replace_page_content": ["docId", "pageIdOrName", "content"],
    "append_page_content": ["docId", "pageIdOrName", "content"],
    "duplicate_page": ["docId", "pageIdOrName", "newName"],
    "rename_page": ["docId", "pageIdOrName", "newName"],
    "peek_page": ["docId", "pageIdOrName", "numLines"],
    "resolve_link": ["url"],
}

MISSING_FIELD_CASES = [
    (tool, field) for tool, fields in REQUIRED_FIELDS.items() for field in fields
]
