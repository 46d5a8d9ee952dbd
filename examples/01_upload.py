"""
Upload buffers, byte lists, files and URLs
"""
import asyncio
from cloudpub import UploadFacade, UploadSource, ResourceType, setup_logging


async def main():
    setup_logging()

    async with UploadFacade.create("demo", "unsigned_preset") as uploader:

        # Simple file upload
        result = await uploader.upload_file(UploadSource.from_file("photo.jpg"))
        print(f"Uploaded: {result.get('secure_url')}")

        # In-memory buffer with a custom public id
        source = UploadSource.from_buffer(
            b"hello world",
            identifier="hello.txt",
            public_id="notes/hello",
            resource_type=ResourceType.RAW,
        )
        result = await uploader.upload_file(source)
        print(f"Uploaded as: {result.get('public_id')}")

        # Let the endpoint fetch a hosted file
        source = UploadSource.from_url(
            "https://example.com/cat.jpg",
            folder="imports",
            tags=["cat"],
        )
        result = await uploader.upload_file(source)
        print(f"Imported: {result.get('secure_url')}")

        # Several files at once
        results = await uploader.upload_files([
            UploadSource.from_file("a.jpg"),
            UploadSource.from_file("b.jpg"),
        ])
        print(f"Uploaded {len(results)} files")


if __name__ == "__main__":
    asyncio.run(main())
