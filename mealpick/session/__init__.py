"""
Question flow and per-user session state.

Responsibilities:
- Define the question steps and their option vocabularies.
- Hold one user's answers, exclusions and weather snapshot between requests.
- Apply flow actions (select, skip, navigate, weather, retry, reset) as pure updates.
"""
