"""
Agent tasks.

- job_search: Finds jobs matching the owner's profile
- resume_distributor: Sends the resume with a generated cover letter
- chat: Answers portfolio visitors
- portfolio_manager: Content analysis, skill suggestions, reminders
"""
