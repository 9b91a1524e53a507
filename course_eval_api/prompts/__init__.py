"""
Prompt templates for the Course Evaluation Summarizer API
"""
