RAW_TEXT_PROMPT = """
Analyze the image and extract ALL text visible in it.
Include any numbers, dates, transaction details, and any other relevant information.
Provide the extracted text as a single, unformatted string.
"""

DATA_EXTRACTION_PROMPT = """
Extract the following details from the given text:
- Date
- 12-digit numeric code starting with 4
- Amount in INR (remove commas and check if it has decimal point)
Validate if the text suggests the image has been edited in any way.
Return ONLY the JSON object in this format:
{{
  "date": "[extracted_date]",
  "utr": "[12-digit_utr]",
  "amount_in_inr": "[formatted_amount]",
  "is_edited": [true/false]
}}

Text to analyze:
{raw_text}
"""

AMOUNT_VERIFICATION_PROMPT = """
The amount {amount} INR was extracted from the payment text below.
This is unusually large. Check the surrounding text and decide whether the
magnitude is right (for example a misplaced decimal point or digits merged
from a neighbouring number).
Reply with exactly one of:
- correct
- not found
- the corrected amount as a plain number without commas or currency symbols

Text:
{raw_text}
"""
