"""
Interview Coach - AI-Powered Mock Interview Practice

Upload a resume and a job description, answer AI-generated interview
questions turn by turn, and receive a structured feedback report.
"""

__version__ = "0.1.0"
__author__ = "Interview Coach Team"
