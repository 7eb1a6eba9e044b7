"""Excel Diff - built-in readers and writers"""
