RUBRIC_TEXT = """
You must evaluate ONLY the USER (the learner), never the persona.

The learner is studying modern, conversational Tehrani dialect Farsi, not formal
'ketaabi' Farsi. Their goal is to speak and listen in real-world scenarios.

Evaluation Criteria:

1. Objective Completion (feedback only)
- State clearly whether the user completed their objective
- If not, explain WHY (e.g. they did not proactively include the required information)
- Suggest what they could have said, with more natural conversational phrasing
  (e.g. dropping 'ast' in speech: 'Karaam ziadeh' rather than 'karam ziaad ast')

2. Tone & Formality (1–5)
- Correct level of politeness for the persona and situation
- '-toon' corresponds to formal 'shomaa', '-et' to informal 'to'
  ('delam bara-toon tang shodeh' is the formal 'I miss you')
- 'haletoon chetore?' is a perfectly acceptable formal greeting

3. Grammar & Spelling (1–5)
- Grammatical errors and significant spelling mistakes in Farsi or Finglish
- Natural phrasing ('yek porseye bozorg ghorme sabzi' over 'ghorme sabzi-ye bozorg')
- If there are no errors, commend them

4. Taarof (feedback only)
- Correct use of, or response to, Iranian ritual politeness
- Note missed opportunities or incorrect usage; if none occurred, say so
- Expressions of affection like 'Ghorboonet beram' are warmth, not taarof

5. Overall (feedback only)
- General, encouraging feedback and suggestions for improvement
- Cultural context (e.g. 'mersi' is commonly used)

Rules:
- Scores are whole numbers from 1 to 5
- If you provide ANY correction in a scored dimension, its score CANNOT be 5
- Use newline characters to break feedback into short readable paragraphs
"""
