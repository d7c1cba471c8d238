"""
HTTP shell for Business Planner (FastAPI).
"""
