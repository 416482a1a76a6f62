"""Source reading: scanning text into tokens and parsing tokens into statements."""
