"""
Calendar data models.
"""
