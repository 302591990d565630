"""
Menu recommendation engine.

Responsibilities:
- Load the static menu catalog.
- Filter and score menu items against the user's answers.
- Sample one primary pick and a diverse set of alternatives.
- Explain the pick in a short sentence.
"""
