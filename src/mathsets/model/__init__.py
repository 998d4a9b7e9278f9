"""
The MODEL layer contains pure data structures and combinatorics.
It has NO knowledge of the GUI (Qt) or of drawing.
"""
