"""Application Layer.

Infrastructure that feeds the domain: reads header and payload files from
disk and hands back domain Value Objects.
"""
