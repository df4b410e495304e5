#!/usr/bin/env python3
"""List the routes registered for the default mock server configuration."""
from mock_hls import HlsServer

server = HlsServer(start_updates=False)
app = server.app

print("\n" + "="*70)
print("Registered routes:")
print("="*70)

routes = []
for rule in app.url_map.iter_rules():
    routes.append({
        'endpoint': rule.endpoint,
        'methods': ','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'})),
        'path': rule.rule
    })

routes.sort(key=lambda x: x['path'])

for route in routes:
    print(f"{route['path']:50} [{route['methods']:15}] -> {route['endpoint']}")

print("="*70)

playlist_routes = [r for r in routes if r['path'].endswith('.m3u8')]
print(f"\nPlaylist routes found: {len(playlist_routes)}")
for route in playlist_routes:
    print(f"  ✓ {route['path']} [{route['methods']}]")

if len(playlist_routes) != 2:
    print("  ❌ Expected a master and a variant playlist route!")

server.close()
