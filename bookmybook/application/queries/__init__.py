"""
QUERIES - Read operations (CQRS)

Subfolders:
- listings/      → browse_listings, get_listing, list_seller_listings
- conversations/ → list_conversations, watch_conversations
- messages/      → get_messages, watch_messages
"""
