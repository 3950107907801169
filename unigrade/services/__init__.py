"""
서비스 계층
"""
