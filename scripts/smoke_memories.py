#!/usr/bin/env python3
"""Walk the memory lifecycle against a running server with two fresh accounts."""
import argparse
import json
import random
import string
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

import requests


def _rand_suffix(length: int = 8) -> str:
    return ''.join(random.choice(string.ascii_lowercase + string.digits) for _ in range(length))


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _expected_excerpt(content: str, length: int = 115) -> str:
    return content[:length] + '...'


def _record(results: list[dict], name: str, response: requests.Response, expected: int) -> bool:
    ok = response.status_code == expected
    entry = {
        'check': name,
        'method': response.request.method,
        'path': response.request.path_url,
        'status': response.status_code,
        'expected': expected,
        'ok': ok,
    }
    if not ok:
        entry['error'] = (response.text or '')[:500]
    results.append(entry)
    return ok


def _login(http: requests.Session, base_url: str) -> Optional[dict]:
    email = f"tester+{_rand_suffix()}@example.com"
    password = 'secret123'
    http.post(f"{base_url}/auth/register", json={'email': email, 'password': password})
    login = http.post(f"{base_url}/auth/login", json={'email': email, 'password': password})
    if login.status_code != 200:
        return None
    token = (_safe_json(login) or {}).get('accessToken')
    return {'Authorization': f"Bearer {token}"} if token else None


def run_checks(base_url: str) -> list[dict]:
    http = requests.Session()
    results: list[dict] = []

    owner = _login(http, base_url)
    other = _login(http, base_url)
    if owner is None or other is None:
        results.append({'check': 'login', 'ok': False, 'error': 'could not obtain access tokens'})
        return results

    content = 'smoke test memory ' + _rand_suffix(16)
    created = http.post(
        f"{base_url}/memories",
        json={'content': content, 'coverUrl': 'http://example.com/cover.png'},
        headers=owner,
    )
    if not _record(results, 'create', created, 201):
        return results
    memory_id = created.json()['id']
    if created.json().get('isPublic') is not False:
        results.append({'check': 'create.default_private', 'ok': False, 'error': created.text[:500]})

    listed = http.get(f"{base_url}/memories", headers=owner)
    _record(results, 'list.owner', listed, 200)
    summaries = {item['id']: item for item in _safe_json(listed) or []}
    if summaries.get(memory_id, {}).get('excerpt') != _expected_excerpt(content):
        results.append({'check': 'list.excerpt', 'ok': False, 'error': json.dumps(summaries.get(memory_id))})

    _record(results, 'get.owner', http.get(f"{base_url}/memories/{memory_id}", headers=owner), 200)
    _record(results, 'get.private_other', http.get(f"{base_url}/memories/{memory_id}", headers=other), 401)
    _record(
        results,
        'update.other',
        http.put(
            f"{base_url}/memories/{memory_id}",
            json={'content': 'hijack', 'coverUrl': 'x', 'isPublic': True},
            headers=other,
        ),
        401,
    )
    _record(
        results,
        'update.owner_publish',
        http.put(
            f"{base_url}/memories/{memory_id}",
            json={'content': content, 'coverUrl': 'http://example.com/cover.png', 'isPublic': True},
            headers=owner,
        ),
        200,
    )
    _record(results, 'get.public_other', http.get(f"{base_url}/memories/{memory_id}", headers=other), 200)
    _record(results, 'get.malformed_id', http.get(f"{base_url}/memories/not-a-uuid", headers=owner), 400)
    _record(results, 'get.unknown_id', http.get(f"{base_url}/memories/{uuid4()}", headers=owner), 404)
    _record(results, 'delete.other', http.delete(f"{base_url}/memories/{memory_id}", headers=other), 401)
    _record(results, 'delete.owner', http.delete(f"{base_url}/memories/{memory_id}", headers=owner), 204)
    _record(results, 'delete.again', http.delete(f"{base_url}/memories/{memory_id}", headers=owner), 404)
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description='Smoke test for the /memories endpoints')
    parser.add_argument('--base-url', default='http://127.0.0.1:3333')
    parser.add_argument('--output', default='reports/smoke_memories.json')
    args = parser.parse_args()

    base_url = args.base_url.rstrip('/')
    try:
        results = run_checks(base_url)
    except requests.RequestException as exc:
        print(f"Server unreachable: {exc}")
        return 1

    total = len(results)
    passed = len([item for item in results if item['ok']])
    failed = total - passed
    summary = {'base_url': base_url, 'total': total, 'passed': passed, 'failed': failed, 'results': results}

    if args.output:
        output_path = Path(args.output)
        if not output_path.is_absolute():
            output_path = Path(__file__).resolve().parents[1] / output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding='utf-8')

    print(f"Total: {total}, Passed: {passed}, Failed: {failed}")
    return 0 if failed == 0 else 2


if __name__ == '__main__':
    raise SystemExit(main())
