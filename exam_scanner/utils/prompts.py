"""
Shared prompts for page scanning services.

The same instruction is sent to every provider so their responses can be
parsed by a single extractor.
"""

PAGE_SCAN_PROMPT = """You are an AI that extracts questions from scanned exam pages. Detect each question and return an object strictly in this JSON format: {{"questions":[{{"que":number, "type":"mcq"|"nat", "bbox":[ymin,xmin,ymax,xmax]}}]}}

- "que": incremental integer (question number, starting from 1)
- "type": "{multiple_choice}" for multiple choice, "{numeric_answer}" for numeric answer type
- "bbox": bounding box of the question in the order: [ymin, xmin, ymax, xmax] as integers in pixel units
Strictly return only the JSON object, nothing else."""
