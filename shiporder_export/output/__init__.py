"""XML serialisation of finalised orders."""
