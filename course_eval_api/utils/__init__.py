"""
Utility helpers for the Course Evaluation Summarizer API
"""
