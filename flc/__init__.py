"""Fuzzy logic controller: fuzzifiers, rules, stitching and defuzzification."""
