"""
PRESENTATION LAYER - HTTP surface (FastAPI routers, auth dependency)
"""
