"""
API package containing the HTTP routes.

``router.py`` exposes a top‑level ``router`` which includes every
domain router (events, info, banners).  It is mounted under ``/api``
by ``create_app``.
"""
