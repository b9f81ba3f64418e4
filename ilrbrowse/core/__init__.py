"""
Core loading, search and session logic for ilrbrowse.
"""
