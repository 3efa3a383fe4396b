"""Propositional formula evaluation over the facts of a finite transition system."""
