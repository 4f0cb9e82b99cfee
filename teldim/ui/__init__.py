"""
Streamlit visualization interface.
"""
