"""Scanner, bytecode compiler and stack virtual machine for arithmetic Lox expressions."""

__version__ = "0.1.0"