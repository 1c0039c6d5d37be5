"""
COMMANDS - Write operations (CQRS)

Commands change state. Each command has:
- Command class: Input data (immutable)
- Handler class: Executes the business logic

Subfolders:
- chat/     → add_message (the message exchange)
- sessions/ → create, rename, toggle_favorite, delete
"""
