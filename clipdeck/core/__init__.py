"""Core components"""
