# newsplus/api/news/schemas.py
from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SortBy = Literal["relevancy", "popularity", "publishedAt"]


class CamelModel(BaseModel):
    # 외부 뉴스 API / 프론트와는 camelCase로 주고받음
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleSource(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None


class Article(CamelModel):
    """기사. 식별자는 url. 한번 가져온 뒤에는 변경하지 않음."""
    source: Optional[ArticleSource] = None
    author: Optional[str] = None
    title: str
    description: Optional[str] = None
    url: str = Field(min_length=1)
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None


class NewsResponse(CamelModel):
    status: str
    total_results: int = 0
    articles: List[Article] = []
    message: Optional[str] = None


class Category(BaseModel):
    name: str
    slug: str
