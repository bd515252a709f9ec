from stylecheck.naming.classifier import ClassTag, ClassToken, classify

__all__ = ["ClassTag", "ClassToken", "classify"]
