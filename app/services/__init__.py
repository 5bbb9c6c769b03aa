# Service layer for the wall-eno status dashboard
# - wall_eno_client: aiohttp client for /wall-eno/json-status
# - status_poller:   periodic fetch/settle loop (NiceGUI timer)
