"""
Profile Icons for the TFT tracker dashboard
Fetches and caches summoner profile icons from Community Dragon
"""

import requests
import os
from typing import Optional
from PIL import Image, ImageTk

from config import DEFAULT_PROFILE_ICON_ID, REQUEST_TIMEOUT
from models import PROFILE_ICON_URL


class ProfileIconManager:
    """Manages profile icons for tracked players"""

    def __init__(self, cache_dir: str = "profile_icons"):
        self.cache_dir = cache_dir
        self.icon_cache = {}

        # Create cache directory
        os.makedirs(cache_dir, exist_ok=True)

    def get_icon_url(self, icon_id: Optional[int]) -> str:
        if icon_id is None:
            icon_id = DEFAULT_PROFILE_ICON_ID
        return PROFILE_ICON_URL.format(icon_id=icon_id)

    def download_icon(self, icon_id: Optional[int]) -> Optional[str]:
        """Download and cache a profile icon, falling back to the default icon"""
        if icon_id is None:
            icon_id = DEFAULT_PROFILE_ICON_ID

        if icon_id in self.icon_cache:
            return self.icon_cache[icon_id]

        filepath = os.path.join(self.cache_dir, f"{icon_id}.jpg")

        # Check if already cached
        if os.path.exists(filepath):
            self.icon_cache[icon_id] = filepath
            return filepath

        try:
            response = requests.get(self.get_icon_url(icon_id), timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            print(f"❌ Error downloading profile icon {icon_id}: {e}")
            return None

        if response.status_code != 200:
            print(f"❌ Failed to download profile icon {icon_id}: {response.status_code}")
            if icon_id != DEFAULT_PROFILE_ICON_ID:
                return self.download_icon(DEFAULT_PROFILE_ICON_ID)
            return None

        with open(filepath, 'wb') as f:
            f.write(response.content)
        self.icon_cache[icon_id] = filepath
        print(f"✅ Downloaded profile icon {icon_id}")
        return filepath

    def get_tkinter_icon(self, icon_id: Optional[int], size: tuple = (48, 48)) -> Optional[ImageTk.PhotoImage]:
        """Get a Tkinter-compatible profile icon"""
        icon_path = self.download_icon(icon_id)
        if not icon_path:
            return None

        try:
            image = Image.open(icon_path)
            image = image.resize(size, Image.Resampling.LANCZOS)
            return ImageTk.PhotoImage(image)
        except OSError as e:
            print(f"❌ Error creating Tkinter icon for {icon_id}: {e}")
            return None
