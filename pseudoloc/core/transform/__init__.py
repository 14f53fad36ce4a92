"""Pseudo-localization engine.

Text is transformed in two steps: a length-preserving character substitution
drawn from the locale profile, then random filler from the profile's
alphabet that pads the string to the length a real translation would
likely need. The two parts are joined with a "|" so reviewers can tell them
apart.

Randomness is always passed in. A seeded random.Random makes output
reproducible; catalog runs derive one generator per entry so results do not
depend on entry order or worker count.
"""
