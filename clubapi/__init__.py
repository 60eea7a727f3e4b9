"""AMSAL FC club backend: members, news, slider, club settings and admins."""
