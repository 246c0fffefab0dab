"""fjoin: concatenate files into one document with headers and fenced code blocks."""
