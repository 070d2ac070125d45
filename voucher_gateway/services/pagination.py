"""
Pagination View Model
=====================
Client-side state of a paginated admin table or activity log list.

STATES:
------
IDLE -> LOADING -> LOADED | ERRORED, re-entered on every page or filter
change.

SUPERSEDING:
-----------
Each fetch takes the next value of a request counter. A response (or error)
that arrives for anything but the latest request is dropped, so a slow
earlier request can never overwrite fresher state.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError

from ..config import config
from ..models.response import Page
from ..utils.constants import FILTER_ALL
from ..utils.logger import logger
from .gateway_client import GatewayClientError

PageFetcher = Callable[[int, int, Dict[str, str]], Awaitable[Page]]

UNEXPECTED_PAGE_MESSAGE = "Unexpected response format from the gateway"


class ViewState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class ListViewModel:
    """Current page, filters and derived page count for one list screen"""
    
    def __init__(
        self,
        fetch_page: PageFetcher,
        per_page: Optional[int] = None,
        filters: Optional[Dict[str, str]] = None,
        page_window: Optional[int] = None
    ):
        self.fetch_page = fetch_page
        self.per_page = per_page or config.pagination.per_page
        self.page_window = page_window or config.pagination.page_window
        self.default_filters: Dict[str, str] = dict(filters or {})
        self.filters: Dict[str, str] = dict(self.default_filters)
        
        self.state = ViewState.IDLE
        self.error: Optional[str] = None
        self.page: Optional[Page] = None
        self.items: List[Any] = []
        self.current_page = 1
        self.last_page = 1
        self.total = 0
        self._sequence = 0
    
    @property
    def active_filters(self) -> Dict[str, str]:
        """Filters sent with a fetch: empty values and "all" are left out"""
        return {
            key: value for key, value in self.filters.items()
            if value not in (None, "", FILTER_ALL)
        }
    
    @property
    def is_loading(self) -> bool:
        return self.state is ViewState.LOADING
    
    @property
    def has_previous(self) -> bool:
        return self.current_page > 1
    
    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page
    
    def clamp(self, page: int) -> int:
        return max(1, min(page, self.last_page))
    
    async def load(self, page: Optional[int] = None) -> bool:
        """
        Fetch a page (the current one by default).

        Returns True when the response was applied, False when it failed or
        was superseded by a newer request.
        """
        target = self.clamp(self.current_page if page is None else page)
        self._sequence += 1
        token = self._sequence
        
        self.current_page = target
        self.state = ViewState.LOADING
        self.error = None
        
        result: Optional[Page] = None
        error: Optional[str] = None
        try:
            result = await self.fetch_page(target, self.per_page, self.active_filters)
        except GatewayClientError as e:
            error = e.message
        except ValidationError as e:
            logger.warning(f"Page {target} did not match the expected shape: {e.error_count()} errors")
            error = UNEXPECTED_PAGE_MESSAGE
        
        if token != self._sequence:
            logger.debug(f"Dropping stale {'error' if error else 'response'} for page {target}")
            return False
        
        if error is None and not isinstance(result, Page):
            logger.warning(f"Page {target} fetch returned {type(result).__name__}, not a page")
            error = UNEXPECTED_PAGE_MESSAGE
        
        if error is not None:
            self.state = ViewState.ERRORED
            self.error = error
            return False
        
        self.page = result
        self.items = list(result.data)
        self.total = result.total
        self.last_page = max(1, result.last_page)
        self.current_page = self.clamp(result.current_page)
        self.state = ViewState.LOADED
        return True
    
    async def go_to_page(self, page: int) -> bool:
        return await self.load(page)
    
    async def next_page(self) -> bool:
        return await self.load(self.current_page + 1)
    
    async def previous_page(self) -> bool:
        return await self.load(self.current_page - 1)
    
    async def refresh(self) -> bool:
        return await self.load()
    
    async def set_filter(self, key: str, value: str) -> bool:
        """Change one filter; resets to page 1 and fetches once"""
        return await self.set_filters(**{key: value})
    
    async def set_filters(self, **values: str) -> bool:
        changed = {key: value for key, value in values.items() if self.filters.get(key) != value}
        if not changed:
            return False
        self.filters.update(changed)
        return await self.load(1)
    
    async def clear_filters(self) -> bool:
        if self.filters == self.default_filters:
            return False
        self.filters = dict(self.default_filters)
        return await self.load(1)
    
    def page_numbers(self) -> List[int]:
        """Page buttons to show: a window around the current page"""
        size = min(self.page_window, self.last_page)
        start = max(1, self.current_page - size // 2)
        start = min(start, self.last_page - size + 1)
        return list(range(start, start + size))
    
    def range_label(self) -> str:
        """Summary line such as: Showing 11 to 20 of 25 results"""
        if not self.page or not self.items:
            return "No results"
        return f"Showing {self.page.from_} to {self.page.to} of {self.total} results"
