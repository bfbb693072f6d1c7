"""Domain records and errors for the blog feed."""
