"""
Memorial Planner - content curation and service planning.

Administrators curate readings, gospels, music, prayers and poems;
families browse them, keep a small wishlist per category and download
a printable plan of the service.
"""

__version__ = "0.1.0"
