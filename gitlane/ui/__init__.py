"""Qt user interface for gitlane"""
