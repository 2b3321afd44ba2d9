DESCRIPTION_PROMPT = """\
Describe the product shown in the image in a concise paragraph, focusing on its \
key visual features and potential materials."""

SKETCH_PROMPT = """\
Generate a clean, black and white technical line drawing of this product.
The sketch should be suitable for a manufacturing specification sheet.
Focus on clear outlines, form, and key details.
Remove all color, shading, and background elements.
The output should be a single, clear product sketch."""

NO_TEXT_RESPONSE = "No text response from AI."
