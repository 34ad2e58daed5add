"""
Serving — REST wrapper around directory scanning and ranking.
"""
