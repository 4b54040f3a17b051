"""
Resume Matcher - Resume Profile Extraction and Job Match Scoring

This application:
1. Normalizes raw resume text
2. Extracts a structured profile (identity, skills, history, education, summary)
3. Scores the profile against job postings by skills, title, experience and location
4. Ranks postings with explainable match reasons, at most once per profile and job
"""

__version__ = "1.0.0"
__author__ = "Resume Matcher"
