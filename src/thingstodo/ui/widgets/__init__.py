from .activity_list import ActivityList
from .city_list import CityList
from .filter_bar import FilterBar
from .location_bar import LocationBar
from .tag_list import TagList
from .title_bar import TitleBar

__all__ = ["ActivityList", "CityList", "FilterBar", "LocationBar", "TagList", "TitleBar"]
