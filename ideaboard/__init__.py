"""Ideaboard: ideas, labels and their storage backends."""
