"""Browser front end for the shell."""
