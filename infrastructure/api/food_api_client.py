import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

log = logging.getLogger(__name__)

# (filename, content, mime type) as produced by st.file_uploader
ImageUpload = Tuple[str, bytes, str]

# Cookie set by the API on login/signup
SESSION_COOKIE = "token"


class ApiError(RuntimeError):
    """Any failed exchange with the food API: transport error, non-2xx or success=false."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def already_exists(self) -> bool:
        return "already exist" in self.message.lower()

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class FoodApiClient:
    """
    Thin client for the food ordering REST API.

    Authentication is the httpOnly session cookie set by the server on login/signup,
    so one client (and one cookie jar) must be owned by exactly one browser session.
    No call is retried.
    """

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def session_token(self) -> Optional[str]:
        return self.session.cookies.get(SESSION_COOKIE)

    def set_session_token(self, token: str) -> None:
        """Seed the cookie jar with a token kept by the browser from an earlier visit."""
        self.session.cookies.set(SESSION_COOKIE, token)

    def _url(self, resource: str, path: str = "") -> str:
        return f"{self.base_url}/api/v1/{resource}{path}"

    def _request(self, method: str, resource: str, path: str = "", **kwargs) -> Dict[str, Any]:
        url = self._url(resource, path)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.error(f"❌ Network error on {method} {url}: {e}")
            raise ApiError(f"Network error: {e}") from e

        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {"data": payload}

        if resp.status_code >= 400 or payload.get("success") is False:
            message = payload.get("message") or f"HTTP {resp.status_code}"
            log.warning(f"⚠️ {method} {url} failed: {resp.status_code} {message}")
            raise ApiError(message, status_code=resp.status_code)
        return payload

    @staticmethod
    def _files(field: str, image: Optional[ImageUpload]):
        if image is None:
            return None
        return {field: image}

    # --- user ---

    def check_auth(self) -> Dict[str, Any]:
        return self._request("GET", "user", "/check-auth")

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "user", "/login", json={"email": email, "password": password})

    def signup(self, fullname: str, email: str, password: str, contact: str) -> Dict[str, Any]:
        body = {"fullname": fullname, "email": email, "password": password, "contact": contact}
        return self._request("POST", "user", "/signup", json=body)

    def logout(self) -> Dict[str, Any]:
        try:
            return self._request("POST", "user", "/logout")
        finally:
            # The server clears its cookie on success; drop ours in every case.
            self.session.cookies.clear()

    def verify_email(self, verification_code: str) -> Dict[str, Any]:
        return self._request("POST", "user", "/verify-email", json={"verificationCode": verification_code})

    def forgot_password(self, email: str) -> Dict[str, Any]:
        return self._request("POST", "user", "/forgot-password", json={"email": email})

    def reset_password(self, token: str, new_password: str) -> Dict[str, Any]:
        return self._request("POST", "user", f"/reset-password/{token}", json={"newPassword": new_password})

    def update_profile(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", "user", "/profile/update", json=patch)

    # --- restaurant ---

    def get_my_restaurant(self) -> Optional[Dict[str, Any]]:
        """Restaurant owned by the current user, or None when the user has none yet."""
        try:
            payload = self._request("GET", "restaurant", "/")
        except ApiError as e:
            if e.not_found:
                return None
            raise
        return payload.get("restaurant")

    def _restaurant_form(self, fields: Dict[str, Any]) -> Dict[str, str]:
        return {
            "restaurantName": fields["restaurantName"],
            "city": fields["city"],
            "country": fields["country"],
            "deliveryTime": str(fields["deliveryTime"]),
            "cuisines": json.dumps(list(fields.get("cuisines") or [])),
        }

    def create_restaurant(self, fields: Dict[str, Any], image: ImageUpload) -> Dict[str, Any]:
        return self._request(
            "POST", "restaurant", "/", data=self._restaurant_form(fields), files=self._files("imageFile", image)
        )

    def update_restaurant(self, fields: Dict[str, Any], image: Optional[ImageUpload] = None) -> Dict[str, Any]:
        return self._request(
            "PUT", "restaurant", "/", data=self._restaurant_form(fields), files=self._files("imageFile", image)
        )

    def search_restaurants(
        self, search_text: str = "", search_query: str = "", cuisines: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        params = {}
        if search_query.strip():
            params["searchQuery"] = search_query
        if cuisines:
            params["selectedCuisines"] = ",".join(cuisines)
        path = f"/search/{search_text.strip()}" if search_text.strip() else "/search/all"
        return self._request("GET", "restaurant", path, params=params or None)

    def get_restaurant(self, restaurant_id: str) -> Dict[str, Any]:
        return self._request("GET", "restaurant", f"/{restaurant_id}").get("restaurant") or {}

    def get_restaurant_orders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "restaurant", "/order").get("orders") or []

    def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        return self._request("PUT", "restaurant", f"/order/{order_id}/status", json={"status": status})

    # --- menu ---

    @staticmethod
    def _menu_form(fields: Dict[str, Any]) -> Dict[str, str]:
        return {
            "name": fields["name"],
            "description": fields["description"],
            "price": str(fields["price"]),
        }

    def create_menu(self, fields: Dict[str, Any], image: ImageUpload) -> Dict[str, Any]:
        return self._request("POST", "menu", "/", data=self._menu_form(fields), files=self._files("image", image))

    def edit_menu(self, menu_id: str, fields: Dict[str, Any], image: Optional[ImageUpload] = None) -> Dict[str, Any]:
        return self._request(
            "PUT", "menu", f"/{menu_id}", data=self._menu_form(fields), files=self._files("image", image)
        )

    def remove_menu(self, menu_id: str) -> Dict[str, Any]:
        return self._request("DELETE", "menu", f"/{menu_id}")

    # --- order ---

    def create_checkout_session(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "order", "/checkout/create-checkout-session", json=body)

    def get_orders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "order", "/").get("orders") or []
