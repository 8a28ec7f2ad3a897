from langchain_ujeebu.tools.extract import UjeebuExtractTool

__all__ = ["UjeebuExtractTool"]
