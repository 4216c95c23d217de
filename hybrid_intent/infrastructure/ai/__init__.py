"""
Machine-learning and rule-based components used for intent classification.
"""
