from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, SecretStr


class ArticleData(BaseModel):
    """Fields of an extracted article. The API omits absent ones."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    author: Optional[str] = None
    pub_date: Optional[str] = None
    modified_date: Optional[str] = None
    url: Optional[str] = None
    canonical_url: Optional[str] = None
    site_name: Optional[str] = None
    summary: Optional[str] = None
    language: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    favicon: Optional[str] = None


class ExtractionFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: bool = True
    html: bool = False
    author: bool = True
    pub_date: bool = True
    images: bool = False
    quick_mode: bool = False  # Faster, slightly less accurate

    def to_query_params(self) -> Dict[str, int]:
        return {
            "text": int(self.text),
            "html": int(self.html),
            "author": int(self.author),
            "pub_date": int(self.pub_date),
            "images": int(self.images),
            "quick_mode": int(self.quick_mode),
        }


class ExtractionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    flags: ExtractionFlags
    api_key: SecretStr

    def params(self) -> Dict[str, object]:
        return {"url": self.url, **self.flags.to_query_params()}

    def headers(self) -> Dict[str, str]:
        return {"ApiKey": self.api_key.get_secret_value()}
