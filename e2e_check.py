"""
End-to-end check against a running API:
- Health
- Register + login
- Ingredient detection from a local photo (optional)
- Recipe recommendation
- Saved recipes: save, list, fetch, delete

Requires:
  pip install requests

Default base_url: http://127.0.0.1:8080
"""
import argparse
import json
import mimetypes
import os
import sys
import uuid
from typing import Any, Dict, List, Optional

import requests


def _pp(title: str, obj: Any):
    print(f"\n===== {title} =====")
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def _post(base_url: str, path: str, payload: Dict[str, Any], token: Optional[str] = None,
          timeout: int = 30) -> requests.Response:
    return requests.post(_url(base_url, path), json=payload, headers=_auth(token), timeout=timeout)


def _get(base_url: str, path: str, token: Optional[str] = None, timeout: int = 30) -> requests.Response:
    return requests.get(_url(base_url, path), headers=_auth(token), timeout=timeout)


def _delete(base_url: str, path: str, token: Optional[str] = None, timeout: int = 30) -> requests.Response:
    return requests.delete(_url(base_url, path), headers=_auth(token), timeout=timeout)


def _auth(token: Optional[str]) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token else {}


def _expect(r: requests.Response, status: int, title: str) -> Dict[str, Any]:
    body = r.json()
    _pp(title, {"status_code": r.status_code, "response": body})
    if r.status_code != status:
        print(f"[FAIL] {title}: expected {status}, got {r.status_code}")
        sys.exit(1)
    return body


def check_health(base_url: str):
    _expect(_get(base_url, "/health"), 200, "Health")


def check_auth(base_url: str, email: str, password: str) -> str:
    print("\n############################")
    print("# AUTH")
    print("############################")
    _expect(_post(base_url, "/auth/register", {"email": email, "password": password, "name": "E2E"}),
            201, "Register")
    _expect(_post(base_url, "/auth/register", {"email": email, "password": password, "name": "E2E"}),
            409, "Register again")
    _expect(_post(base_url, "/auth/login", {"email": email, "password": password + "x"}),
            401, "Login with wrong password")
    body = _expect(_post(base_url, "/auth/login", {"email": email, "password": password}), 200, "Login")
    _expect(_get(base_url, "/api/v1/me"), 401, "Me without token")
    return body["token"]


def check_detect(base_url: str, token: str, image_path: str) -> List[str]:
    print("\n############################")
    print("# DETECT")
    print("############################")
    content_type = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
    with open(image_path, "rb") as f:
        files = {"image": (os.path.basename(image_path), f, content_type)}
        r = requests.post(_url(base_url, "/api/v1/detect"), files=files, headers=_auth(token), timeout=120)
    body = _expect(r, 200, "Detect ingredients")
    return [i["name"] for i in body.get("ingredients", [])]


def check_recommend(base_url: str, token: str, ingredients: List[str]) -> Dict[str, Any]:
    print("\n############################")
    print("# RECOMMEND")
    print("############################")
    _expect(_post(base_url, "/api/v1/recipes/recommend", {"ingredients": []}, token), 400, "Recommend nothing")
    body = _expect(
        _post(base_url, "/api/v1/recipes/recommend", {"ingredients": ingredients}, token, timeout=180),
        200,
        "Recommend",
    )
    if not body.get("recipes"):
        print("[FAIL] model returned no recipes")
        sys.exit(1)
    return body["recipes"][0]


def check_saved(base_url: str, token: str, recipe: Dict[str, Any]):
    print("\n############################")
    print("# SAVED RECIPES")
    print("############################")
    saved = _expect(_post(base_url, "/api/v1/recipes/saved", recipe, token), 201, "Save recipe")
    listing = _expect(_get(base_url, "/api/v1/recipes/saved", token), 200, "List saved")
    if saved["id"] not in {r["id"] for r in listing["recipes"]}:
        print("[FAIL] saved recipe missing from listing")
        sys.exit(1)
    _expect(_get(base_url, f"/api/v1/recipes/saved/{saved['id']}", token), 200, "Get saved")
    _expect(_delete(base_url, f"/api/v1/recipes/saved/{saved['id']}", token), 200, "Delete saved")
    _expect(_get(base_url, f"/api/v1/recipes/saved/{saved['id']}", token), 404, "Get deleted")


# ==============================
# main
# ==============================

def main():
    parser = argparse.ArgumentParser(description="RecipeLens end-to-end check")
    parser.add_argument("--base-url", default="http://127.0.0.1:8080", help="API base URL")
    parser.add_argument("--email", default=f"e2e-{uuid.uuid4().hex[:8]}@example.com")
    parser.add_argument("--password", default="e2e-password")
    parser.add_argument("--image", default="", help="Photo to run through /api/v1/detect")
    parser.add_argument("--ingredients", default="tomato,egg,onion", help="Used when no image is given")
    parser.add_argument("--keep-user", action="store_true", help="Do not delete the account at the end")
    args = parser.parse_args()

    check_health(args.base_url)
    token = check_auth(args.base_url, args.email, args.password)

    ingredients = [i.strip() for i in args.ingredients.split(",") if i.strip()]
    if args.image:
        detected = check_detect(args.base_url, token, args.image)
        ingredients = detected or ingredients

    recipe = check_recommend(args.base_url, token, ingredients)
    check_saved(args.base_url, token, recipe)

    if not args.keep_user:
        _expect(_delete(args.base_url, "/api/v1/me", token), 200, "Delete account")

    print("\nAll checks passed.")


if __name__ == "__main__":
    main()
