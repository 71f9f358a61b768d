"""
COMMANDS - Write operations (CQRS)

Subfolders:
- auth/          → sign_in, sign_up, sign_out
- listings/      → create_listing, delete_listing
- media/         → upload_image
- messages/      → send_message
- conversations/ → mark_read
"""
