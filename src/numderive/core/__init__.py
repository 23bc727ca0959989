"""Type description, validation and naming for numderive."""
