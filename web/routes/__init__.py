"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- books: 장부 CRUD
- labels: 라벨 CRUD
- expenses: 거래 CRUD + 장부 마감
- summary: 요약 카드 / 지출 차트
"""
