"""
Business services for the video sharing backend.

- channel_stats: dashboard aggregates for a channel
- video_query: single-statement video search/sort/pagination
- videos: video publish/update/delete/toggle
- tweets: tweet CRUD
"""
