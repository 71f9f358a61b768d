"""
DOMAIN LAYER - Marketplace and messaging rules

This layer contains:
- Entities: Business objects with identity (BookListing, Conversation, Message, User)
- Value Objects: Immutable types (UserId, ConversationId, ListingId, Price)
- Ports: Interfaces that infrastructure implements (DocumentStore, AuthService, MediaUploader)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Firebase, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
