"""Excel Diff - utilities"""
