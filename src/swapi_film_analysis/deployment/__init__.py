"""
End-to-end analysis runs wiring the client, flattener and models together.
"""
