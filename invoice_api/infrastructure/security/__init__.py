"""Security adapters: password hashing, token signing, identity lookup."""
