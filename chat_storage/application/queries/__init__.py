"""
QUERIES - Read operations (CQRS)

Queries retrieve data without modifying state. Each query has:
- Query class: Parameters for the read
- Handler class: Executes the read

Subfolders:
- sessions/ → list_sessions (incl. favorites), get_session
- messages/ → list_messages
"""
