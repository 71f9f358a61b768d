"""
INFRASTRUCTURE LAYER - Adapters implementing the domain ports

- firebase/    → Firestore document store, Firebase Auth (Identity Toolkit + JWKS)
- memory/      → in-memory document store (local runs, tests)
- cloudinary/  → media upload
- persistence/ → repositories on top of the DocumentStore port
"""
