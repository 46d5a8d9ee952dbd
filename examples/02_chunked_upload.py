"""
Chunked upload of a large file
"""
import asyncio
from cloudpub import UploadFacade, UploadSource, plan_chunks


async def main():
    source = UploadSource.from_file(
        "movie.mp4",
        folder="trailers",
        context={"alt": "Trailer", "caption": "Coming soon"},
    )

    # Inspect the plan first
    size = await source.byte_size()
    for chunk in plan_chunks(size, 20_000_000):
        print(f"bytes {chunk.content_range}/{size}")

    async with UploadFacade.create("demo", "unsigned_preset") as uploader:
        result = await uploader.upload_file_in_chunks(source, chunk_size=20_000_000)
        print(f"Uploaded: {result.get('secure_url')}")


if __name__ == "__main__":
    asyncio.run(main())
