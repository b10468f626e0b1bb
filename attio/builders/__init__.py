from attio.builders.name_builder import NameBuilder

__all__ = ["NameBuilder"]
