"""Static resolution and evaluation passes over the Lox syntax tree."""
