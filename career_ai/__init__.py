"""
Career Assessment Platform
Questionnaire -> Gemini AI -> personalised career report.

Architecture:
- MongoDB: users and assessment submissions (answers + AI analysis)
- Gemini: turns answers into a readable report (not a database!)
- JWT cookie sessions, server-rendered Jinja2 pages
"""

__version__ = "1.0.0"
