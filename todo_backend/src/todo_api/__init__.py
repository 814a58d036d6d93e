"""
Weather Todo Backend package.

Read API over weather-tagged todos: single lookup and filtered, paginated
listing. The FastAPI application lives in `src.todo_api.main`.
"""
