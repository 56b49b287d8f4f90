from .module_resolver import ModuleResolver, module_type_from_ref

__all__ = ["ModuleResolver", "module_type_from_ref"]
