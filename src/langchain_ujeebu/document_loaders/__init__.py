from langchain_ujeebu.document_loaders.ujeebu import UjeebuLoader

__all__ = ["UjeebuLoader"]
