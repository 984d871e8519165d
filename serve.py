"""
Start the recommender API locally.

Listens on PORT (default 4000).
"""

import uvicorn

from recommender.config import settings

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Product Recommender Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print(f"   - Health Check:  GET  http://localhost:{settings.PORT}/health")
    print(f"   - Catalog:       GET  http://localhost:{settings.PORT}/api/products")
    print(f"   - Recommend:     POST http://localhost:{settings.PORT}/api/recommend")
    print(f"   - API Docs:           http://localhost:{settings.PORT}/docs")
    print()
    print("📝 Test with curl:")
    print(f'   curl -X POST "http://localhost:{settings.PORT}/api/recommend" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"query": "I want a phone under $500"}\'')
    print()
    print("=" * 60)

    uvicorn.run(
        "recommender.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower()
    )
