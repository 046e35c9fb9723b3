"""HTML 페이지 라우터와 JSON API 라우터."""
